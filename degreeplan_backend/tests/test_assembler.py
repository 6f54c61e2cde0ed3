from app.services.assembler import (
    assemble_plan,
    build_semesters,
    find_unmet_requirements,
    semester_warnings,
)
from app.services.catalog import CourseRecord
from app.services.requirements import CompletedCourse, RequirementCategory
from app.services.scheduler import PlacedCourse, PlacementResult, place_courses
from app.services.terms import Season, Term

FALL_2024 = Term(Season.FALL, 2024)
SPRING_2025 = Term(Season.SPRING, 2025)
SUMMER_2025 = Term(Season.SUMMER, 2025)


def _placed(code, term, credits=3, label="core"):
    record = CourseRecord(course_id=code, name=code, credits=credits)
    return PlacedCourse(record=record, term=term, satisfies=(label,))


def _category(label, courses):
    return RequirementCategory(label=label, courses=tuple(courses), owner="CMSC")


def test_build_semesters_groups_and_drops_empty_terms():
    placements = [
        _placed("CMSC131", FALL_2024, 4),
        _placed("MATH140", FALL_2024, 4),
        _placed("CMSC132", SUMMER_2025, 4),
    ]

    semesters = build_semesters([FALL_2024, SPRING_2025, SUMMER_2025], placements)

    assert [s.term for s in semesters] == [FALL_2024, SUMMER_2025]
    assert [s.total_credits for s in semesters] == [8, 4]
    assert [c.course_id for c in semesters[0].courses] == ["CMSC131", "MATH140"]


def test_overloaded_semester_warning():
    semesters = build_semesters(
        [FALL_2024], [_placed(f"C{i}", FALL_2024, 6) for i in range(3)]
    )

    assert semester_warnings(semesters, max_credits=15) == ["Fall 2024: Overloaded with 18 credits"]


def test_under_full_time_warning():
    semesters = build_semesters([SPRING_2025], [_placed("ENGL101", SPRING_2025, 3)])

    assert semester_warnings(semesters, max_credits=15) == [
        "Spring 2025: Under full-time status with 3 credits"
    ]


def test_full_time_semester_has_no_warning():
    semesters = build_semesters([FALL_2024], [_placed(f"C{i}", FALL_2024, 4) for i in range(3)])

    assert semester_warnings(semesters, max_credits=15) == []


def test_overshooting_placement_is_flagged_overloaded():
    catalog = {
        "CMSC131": CourseRecord(course_id="CMSC131", name="CMSC131", credits=4),
        "MATH140": CourseRecord(course_id="MATH140", name="MATH140", credits=4),
    }
    categories = [_category("Intro", ["CMSC131", "MATH140"])]
    placement = place_courses(categories, catalog, set(), [FALL_2024], 6)

    plan = assemble_plan([FALL_2024], placement, categories, [], max_credits=6, full_time_credits=8)

    assert plan.semesters[0].total_credits == 8
    assert plan.warnings == ("Fall 2024: Overloaded with 8 credits",)


class TestUnmetRequirements:
    """Tests for categories with no course placed or completed."""

    def test_category_with_one_placed_course_is_met(self):
        categories = [_category("Math", ["MATH140", "MATH141"])]

        assert find_unmet_requirements(categories, {"MATH140"}, set()) == []

    def test_completed_course_counts(self):
        categories = [_category("Intro", ["CMSC131"])]

        assert find_unmet_requirements(categories, set(), {"CMSC131"}) == []

    def test_nothing_placed_is_unmet(self):
        categories = [_category("Upper Level", ["CMSC420"]), _category("Intro", ["CMSC131"])]

        assert find_unmet_requirements(categories, {"CMSC131"}, set()) == ["Upper Level"]

    def test_elective_bucket_is_unmet(self):
        categories = [_category("Free Electives", [])]

        assert find_unmet_requirements(categories, {"CMSC131"}, {"ENGL101"}) == ["Free Electives"]

    def test_shared_label_reported_per_category(self):
        categories = [
            RequirementCategory(label="Core", courses=("A",), owner="CMSC"),
            RequirementCategory(label="Core", courses=("B",), owner="MATH"),
            _category("Lab", ["C"]),
        ]

        assert find_unmet_requirements(categories, set(), set()) == ["Core", "Core", "Lab"]

    def test_met_category_does_not_hide_same_label(self):
        categories = [
            RequirementCategory(label="Core", courses=("A",), owner="CMSC"),
            RequirementCategory(label="Core", courses=("B",), owner="MATH"),
        ]

        assert find_unmet_requirements(categories, {"A"}, set()) == ["Core"]


def test_assemble_plan_totals_include_completed_credits():
    placements = [_placed("CMSC132", FALL_2024, 4), _placed("CMSC216", SPRING_2025, 4)]
    categories = [_category("Lower Level", ["CMSC131", "CMSC132", "CMSC216"])]
    completed = [CompletedCourse("CMSC131", 4), CompletedCourse("ENGL101", 3)]

    plan = assemble_plan(
        [FALL_2024, SPRING_2025, SUMMER_2025],
        PlacementResult(placements=placements, unplaced=[]),
        categories,
        completed,
        max_credits=15,
    )

    assert [s.total_credits for s in plan.semesters] == [4, 4]
    assert plan.total_credits == sum(s.total_credits for s in plan.semesters) + 7
    assert plan.completion_term == SUMMER_2025
    assert plan.unmet_requirements == ()
    assert plan.warnings == (
        "Fall 2024: Under full-time status with 4 credits",
        "Spring 2025: Under full-time status with 4 credits",
    )
