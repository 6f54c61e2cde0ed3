from collections.abc import Iterable
from dataclasses import dataclass

from app.schemas.plan import ProgramIn


@dataclass(frozen=True)
class RequirementCategory:
    label: str
    courses: tuple[str, ...]
    owner: str
    kind: str = "major"  # major/minor
    credits_target: int | None = None

    @property
    def is_elective_bucket(self) -> bool:
        return not self.courses


@dataclass(frozen=True)
class CompletedCourse:
    course_id: str
    credits: int


def collect_categories(
    majors: Iterable[ProgramIn], minors: Iterable[ProgramIn] = ()
) -> list[RequirementCategory]:
    categories: list[RequirementCategory] = []
    for kind, programs in (("major", majors), ("minor", minors)):
        for program in programs:
            for req in program.requirements:
                categories.append(
                    RequirementCategory(
                        label=req.category,
                        courses=tuple(req.courses),
                        owner=program.code,
                        kind=kind,
                        credits_target=req.credits_target,
                    )
                )
    return categories


def is_satisfied(category: RequirementCategory, completed_ids: set[str]) -> bool:
    # Elective/credit-target buckets are never auto-satisfied
    if category.is_elective_bucket:
        return False
    return all(course in completed_ids for course in category.courses)


def satisfied_categories(
    categories: Iterable[RequirementCategory], completed_ids: set[str]
) -> set[str]:
    return {c.label for c in categories if is_satisfied(c, completed_ids)}


def unsatisfied_categories(
    categories: Iterable[RequirementCategory], completed_ids: set[str]
) -> list[RequirementCategory]:
    return [c for c in categories if not is_satisfied(c, completed_ids)]
