from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from app.services.catalog import DEFAULT_CREDITS, CourseRecord, stub_record
from app.services.requirements import RequirementCategory
from app.services.terms import Term


@dataclass(frozen=True)
class PlacedCourse:
    record: CourseRecord
    term: Term
    satisfies: tuple[str, ...]

    @property
    def course_id(self) -> str:
        return self.record.course_id

    @property
    def credits(self) -> int:
        return self.record.credits


@dataclass
class PlacementResult:
    placements: list[PlacedCourse]
    unplaced: list[str]


def place_courses(
    categories: Iterable[RequirementCategory],
    catalog: Mapping[str, CourseRecord],
    completed_ids: Iterable[str],
    terms: Iterable[Term],
    max_credits: int,
    stub_credits: int = DEFAULT_CREDITS,
) -> PlacementResult:
    """Greedily place every course of the given categories into the earliest
    term where its prerequisites are done and the term still has room.

    Terms are visited in order, then categories in declared order, then each
    category's courses in declared order. A course is added while the term's
    running total is below ``max_credits``; the course that reaches the cap
    may carry the total past it, and nothing more starts in that term. A
    course placed in a term only counts as completed from the next term on,
    so a course never shares a term with its prerequisite. Courses that never
    become eligible are left out of the placements and listed in ``unplaced``.
    """
    categories = list(categories)
    completed = set(completed_ids)
    placements: list[PlacedCourse] = []

    for term in terms:
        remaining = max_credits
        taken_now: set[str] = set()
        for category in categories:
            for course_id in category.courses:
                if course_id in completed or course_id in taken_now:
                    continue
                if remaining <= 0:
                    break
                record = catalog.get(course_id) or stub_record(course_id, stub_credits)
                if not record.prerequisites.issubset(completed):
                    continue
                placements.append(
                    PlacedCourse(record=record, term=term, satisfies=(category.label,))
                )
                taken_now.add(course_id)
                remaining -= record.credits
        completed |= taken_now

    # completed now holds the initial ids plus everything placed
    unplaced = [
        course_id
        for course_id in dict.fromkeys(c for cat in categories for c in cat.courses)
        if course_id not in completed
    ]
    return PlacementResult(placements=placements, unplaced=unplaced)
