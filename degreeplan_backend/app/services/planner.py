import logging

from pydantic import ValidationError

from app.core.errors import InputValidationError
from app.schemas.plan import (
    PlanGenerateRequest,
    PlanGenerateResponse,
    PlannedCourseOut,
    SemesterOut,
)
from app.services.assembler import FULL_TIME_CREDITS, GraduationPlan, assemble_plan
from app.services.catalog import DEFAULT_CREDITS, resolve_many
from app.services.requirements import (
    CompletedCourse,
    collect_categories,
    unsatisfied_categories,
)
from app.services.scheduler import place_courses
from app.services.terms import term_sequence

logger = logging.getLogger(__name__)


def build_request(payload: dict) -> PlanGenerateRequest:
    try:
        return PlanGenerateRequest.model_validate(payload)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'request'}: {err['msg']}"
            for err in exc.errors()
        )
        raise InputValidationError(details) from exc


def generate_graduation_plan(
    payload: PlanGenerateRequest,
    resolver,
    stub_credits: int = DEFAULT_CREDITS,
    full_time_credits: int = FULL_TIME_CREDITS,
    max_workers: int = 8,
    lookup_timeout: float = 5.0,
) -> GraduationPlan:
    # Raises TermRangeError before any catalog work happens
    terms = term_sequence(payload.starting_term.to_term(), payload.target_term.to_term())

    # A course repeated on the transcript only counts once
    credits_by_id: dict[str, int] = {}
    for course in payload.completed_courses:
        credits_by_id.setdefault(course.course_id, course.credits)
    completed = [CompletedCourse(cid, credits) for cid, credits in credits_by_id.items()]
    completed_ids = set(credits_by_id)

    categories = collect_categories(payload.majors, payload.minors)
    remaining = unsatisfied_categories(categories, completed_ids)

    needed = [
        course_id
        for category in remaining
        for course_id in category.courses
        if course_id not in completed_ids
    ]
    catalog = resolve_many(
        resolver,
        needed,
        max_workers=max_workers,
        timeout=lookup_timeout,
        stub_credits=stub_credits,
    )

    placement = place_courses(
        remaining,
        catalog,
        completed_ids,
        terms,
        payload.max_credits_per_semester,
        stub_credits=stub_credits,
    )
    plan = assemble_plan(
        terms,
        placement,
        categories,
        completed,
        payload.max_credits_per_semester,
        full_time_credits=full_time_credits,
    )
    logger.info(
        "generated plan over %d terms: %d courses placed in %d semesters, %d unmet requirement(s)",
        len(terms),
        len(placement.placements),
        len(plan.semesters),
        len(plan.unmet_requirements),
    )
    return plan


def plan_to_response(plan: GraduationPlan) -> PlanGenerateResponse:
    return PlanGenerateResponse(
        semesters=[
            SemesterOut(
                season=sem.term.season,
                year=sem.term.year,
                courses=[
                    PlannedCourseOut(
                        course_id=placed.course_id,
                        name=placed.record.name,
                        credits=placed.credits,
                        prerequisites=sorted(placed.record.prerequisites),
                        satisfies=list(placed.satisfies),
                    )
                    for placed in sem.courses
                ],
                total_credits=sem.total_credits,
            )
            for sem in plan.semesters
        ],
        total_credits=plan.total_credits,
        completion_term=plan.completion_term.label,
        warnings=list(plan.warnings),
        unmet_requirements=list(plan.unmet_requirements),
    )
