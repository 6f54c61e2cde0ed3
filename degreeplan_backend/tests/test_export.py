import json

import pytest

from app.core.errors import InputValidationError
from app.schemas.plan import PlanGenerateResponse, PlannedCourseOut, SemesterOut
from app.services.export import (
    CSV_HEADERS,
    export_plan_csv,
    export_plan_json,
    read_plan_csv,
    render_export,
)
from app.services.planner import build_request, generate_graduation_plan, plan_to_response
from app.services.terms import Season, Term


@pytest.fixture
def generated_plan(umd_resolver):
    request = build_request(
        {
            "majors": [
                {
                    "code": "CMSC",
                    "requirements": [
                        {"category": "Lower Level CS", "courses": ["CMSC131", "CMSC132", "CMSC216", "CMSC250"]},
                        {"category": "Math", "courses": ["MATH140", "MATH141", "STAT400"]},
                        {"category": "Upper Level CS", "courses": ["CMSC330", "CMSC351"]},
                    ],
                }
            ],
            "completedCourses": [{"course_id": "ENGL101", "credits": 3}],
            "startingTerm": "Fall 2024",
            "targetTerm": "Fall 2026",
            "maxCreditsPerSemester": 8,
        }
    )
    return plan_to_response(generate_graduation_plan(request, umd_resolver))


def test_csv_round_trip(generated_plan):
    semesters = read_plan_csv(export_plan_csv(generated_plan))

    assert len(semesters) == len(generated_plan.semesters)
    for parsed, expected in zip(semesters, generated_plan.semesters):
        assert parsed.term == expected.to_term()
        assert parsed.total_credits == expected.total_credits
        assert [(c.course_id, c.credits) for c in parsed.courses] == [
            (c.course_id, c.credits) for c in expected.courses
        ]
        assert [c.prerequisites for c in parsed.courses] == [c.prerequisites for c in expected.courses]
        assert [c.satisfies for c in parsed.courses] == [c.satisfies for c in expected.courses]


def test_csv_without_details(generated_plan):
    content = export_plan_csv(generated_plan, include_details=False)

    rows = [line for line in content.splitlines() if line and not line.startswith("#")]
    assert rows[0] == ",".join(CSV_HEADERS)
    assert all(len(row.split(",")) == len(CSV_HEADERS) for row in rows[1:])

    parsed = read_plan_csv(content)
    assert parsed[0].courses[0].prerequisites == []


def test_csv_summary_and_quoting():
    plan = PlanGenerateResponse(
        semesters=[
            SemesterOut(
                season=Season.SPRING,
                year=2025,
                courses=[
                    PlannedCourseOut(
                        course_id="ENGL101",
                        name='Academic Writing, "Honors"',
                        credits=3,
                        satisfies=["Writing, Fundamental Studies"],
                    )
                ],
                total_credits=3,
            )
        ],
        total_credits=33,
        completion_term="Spring 2025",
    )

    content = export_plan_csv(plan, majors=["Computer Science", "Mathematics"])

    assert "# Total Credits: 33" in content
    assert "# Completion Date: Spring 2025" in content
    assert "# Majors: Computer Science, Mathematics" in content
    assert "# Spring 2025 Total Credits:,3" in content
    [semester] = read_plan_csv(content)
    assert semester.term == Term(Season.SPRING, 2025)
    assert semester.courses[0].name == 'Academic Writing, "Honors"'
    assert semester.courses[0].satisfies == ["Writing, Fundamental Studies"]


def test_read_rejects_malformed_rows():
    content = ",".join(CSV_HEADERS) + "\nFall,2024,CMSC131,Object-Oriented Programming I,four\n"

    with pytest.raises(InputValidationError):
        read_plan_csv(content)


def test_json_export_uses_wire_names(generated_plan):
    body = json.loads(export_plan_json(generated_plan))

    assert body["totalCredits"] == generated_plan.total_credits
    assert body["semesters"][0]["totalCredits"] == generated_plan.semesters[0].total_credits
    assert "unmetRequirements" in body


def test_render_export(generated_plan):
    result = render_export(generated_plan, "CSV")
    assert (result.media_type, result.filename) == ("text/csv", "graduation-plan.csv")

    result = render_export(generated_plan, "json")
    assert (result.media_type, result.filename) == ("application/json", "graduation-plan.json")

    with pytest.raises(InputValidationError):
        render_export(generated_plan, "xlsx")
