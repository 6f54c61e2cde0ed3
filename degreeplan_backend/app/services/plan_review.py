from collections.abc import Iterable
from dataclasses import dataclass, field

from app.schemas.plan import PlanGenerateResponse
from app.services.assembler import FULL_TIME_CREDITS

HEAVY_LOAD_CREDITS = 20
GRADUATION_CREDITS = 120
MAX_SEMESTERS = 8


@dataclass
class PlanReview:
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.errors.append(message)
        self.is_valid = False


def review_plan(
    plan: PlanGenerateResponse,
    completed_ids: Iterable[str] = (),
    heavy_load_credits: int = HEAVY_LOAD_CREDITS,
    full_time_credits: int = FULL_TIME_CREDITS,
    graduation_credits: int = GRADUATION_CREDITS,
    max_semesters: int = MAX_SEMESTERS,
) -> PlanReview:
    """Check a submitted plan, which may have been edited by hand since it
    was generated, for load, prerequisite order and total credits."""
    review = PlanReview()

    for sem in plan.semesters:
        if sem.total_credits > heavy_load_credits:
            review.warnings.append(
                f"{sem.label}: Heavy course load ({sem.total_credits} credits)"
            )
        if sem.courses and sem.total_credits < full_time_credits:
            review.warnings.append(
                f"{sem.label}: Below full-time status ({sem.total_credits} credits)"
            )

    done = set(completed_ids)
    for sem in sorted(plan.semesters, key=lambda s: s.to_term()):
        for course in sem.courses:
            missing = [p for p in course.prerequisites if p not in done]
            if missing:
                review.error(
                    f"{course.course_id} in {sem.label}: Missing prerequisites: {', '.join(missing)}"
                )
        # Courses count toward prerequisites from the following semester on
        done.update(course.course_id for course in sem.courses)

    if plan.total_credits < graduation_credits:
        review.error(
            f"Insufficient total credits for graduation: {plan.total_credits}/{graduation_credits}"
        )

    if len(plan.semesters) > max_semesters:
        review.suggestions.append("Consider taking summer courses to reduce time to graduation")

    return review
