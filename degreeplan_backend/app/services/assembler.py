from collections.abc import Iterable
from dataclasses import dataclass

from app.services.requirements import CompletedCourse, RequirementCategory
from app.services.scheduler import PlacedCourse, PlacementResult
from app.services.terms import Term

FULL_TIME_CREDITS = 12


@dataclass(frozen=True)
class SemesterPlan:
    term: Term
    courses: tuple[PlacedCourse, ...]
    total_credits: int


@dataclass(frozen=True)
class GraduationPlan:
    semesters: tuple[SemesterPlan, ...]
    total_credits: int
    completion_term: Term
    warnings: tuple[str, ...] = ()
    unmet_requirements: tuple[str, ...] = ()


def build_semesters(terms: Iterable[Term], placements: Iterable[PlacedCourse]) -> list[SemesterPlan]:
    """Group placements by term, keeping term order and dropping empty terms."""
    by_term: dict[Term, list[PlacedCourse]] = {}
    for placed in placements:
        by_term.setdefault(placed.term, []).append(placed)

    semesters = []
    for term in terms:
        courses = by_term.get(term)
        if not courses:
            continue
        semesters.append(
            SemesterPlan(
                term=term,
                courses=tuple(courses),
                total_credits=sum(c.credits for c in courses),
            )
        )
    return semesters


def semester_warnings(
    semesters: Iterable[SemesterPlan],
    max_credits: int,
    full_time_credits: int = FULL_TIME_CREDITS,
) -> list[str]:
    warnings = []
    for sem in semesters:
        # The course that fills a term may carry it past the cap
        if sem.total_credits > max_credits:
            warnings.append(f"{sem.term.label}: Overloaded with {sem.total_credits} credits")
        if sem.courses and sem.total_credits < full_time_credits:
            warnings.append(
                f"{sem.term.label}: Under full-time status with {sem.total_credits} credits"
            )
    return warnings


def find_unmet_requirements(
    categories: Iterable[RequirementCategory],
    placed_ids: set[str],
    completed_ids: set[str],
) -> list[str]:
    """Labels of categories with none of their courses placed or completed.

    A category with an empty course list has nothing that could meet it and is
    always reported. Categories sharing a label are reported once each, in
    declaration order.
    """
    covered = placed_ids | completed_ids
    return [
        category.label
        for category in categories
        if not any(course in covered for course in category.courses)
    ]


def assemble_plan(
    terms: list[Term],
    placement: PlacementResult,
    categories: list[RequirementCategory],
    completed: list[CompletedCourse],
    max_credits: int,
    full_time_credits: int = FULL_TIME_CREDITS,
) -> GraduationPlan:
    semesters = build_semesters(terms, placement.placements)

    warnings = semester_warnings(semesters, max_credits, full_time_credits)

    completed_ids = {c.course_id for c in completed}
    placed_ids = {p.course_id for p in placement.placements}
    unmet = find_unmet_requirements(categories, placed_ids, completed_ids)

    total = sum(s.total_credits for s in semesters) + sum(c.credits for c in completed)
    return GraduationPlan(
        semesters=tuple(semesters),
        total_credits=total,
        completion_term=terms[-1],
        warnings=tuple(warnings),
        unmet_requirements=tuple(unmet),
    )
