import csv
from io import StringIO

from app.schemas.course import CourseCreate
from app.schemas.prerequisite import PrerequisiteCreate
from app.services.catalog import parse_prerequisites


def parse_catalog_csv(content: str) -> tuple[list[CourseCreate], list[PrerequisiteCreate]]:
    """Read catalog rows with a code, optional title/credits and a free-text
    prerequisites column such as "Minimum grade of C- in CMSC132"."""
    reader = csv.DictReader(StringIO(content))
    courses: list[CourseCreate] = []
    prereqs: list[PrerequisiteCreate] = []
    for row in reader:
        code = row.get("course_code") or row.get("code") or row.get("course")
        if not code or not code.strip():
            continue
        code = code.strip()
        courses.append(
            CourseCreate(
                code=code,
                title=(row.get("course_title") or row.get("title") or "").strip() or None,
                credits=_to_int(row.get("credits")),
            )
        )
        for prereq in sorted(parse_prerequisites(row.get("prerequisites"))):
            if prereq != code:
                prereqs.append(PrerequisiteCreate(course_code=code, prereq_code=prereq))
    return courses, prereqs


def _to_int(value: str | None) -> int | None:
    if value is None:
        return None
    value = value.strip()
    if not value.isdigit():
        return None
    return int(value)
