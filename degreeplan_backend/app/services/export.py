import csv
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from io import StringIO

from app.core.errors import InputValidationError
from app.schemas.plan import PlanGenerateResponse
from app.services.terms import Term, parse_season, parse_term_label

CSV_HEADERS = ["Semester", "Year", "Course Code", "Course Name", "Credits"]
DETAIL_HEADERS = ["Prerequisites", "Satisfies Requirements"]
_LIST_SEP = "; "

_TOTAL_RE = re.compile(r"^#\s*(\w+\s+\d{4})\s+Total Credits:\s*$")


@dataclass
class ExportedCourse:
    course_id: str
    name: str
    credits: int
    prerequisites: list[str] = field(default_factory=list)
    satisfies: list[str] = field(default_factory=list)


@dataclass
class ExportedSemester:
    term: Term
    courses: list[ExportedCourse] = field(default_factory=list)
    total_credits: int | None = None


@dataclass(frozen=True)
class ExportResult:
    body: str
    media_type: str
    filename: str


def export_plan_csv(
    plan: PlanGenerateResponse,
    include_details: bool = True,
    majors: Sequence[str] = (),
    minors: Sequence[str] = (),
) -> str:
    headers = CSV_HEADERS + (DETAIL_HEADERS if include_details else [])
    buf = StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    writer.writerow(["# Graduation Plan Summary"])
    writer.writerow([f"# Total Credits: {plan.total_credits}"])
    if plan.completion_term:
        writer.writerow([f"# Completion Date: {plan.completion_term}"])
    if majors:
        writer.writerow([f"# Majors: {', '.join(majors)}"])
    if minors:
        writer.writerow([f"# Minors: {', '.join(minors)}"])
    writer.writerow([])
    writer.writerow(headers)

    for sem in plan.semesters:
        for course in sem.courses:
            row = [
                sem.season.value.title(),
                str(sem.year),
                course.course_id,
                course.name,
                str(course.credits),
            ]
            if include_details:
                row.append(_LIST_SEP.join(course.prerequisites))
                row.append(_LIST_SEP.join(course.satisfies))
            writer.writerow(row)
        writer.writerow([f"# {sem.label} Total Credits:", str(sem.total_credits)])
        writer.writerow([])

    return buf.getvalue()


def read_plan_csv(content: str) -> list[ExportedSemester]:
    """Parse rows written by ``export_plan_csv`` back into semesters."""
    semesters: dict[Term, ExportedSemester] = {}
    for line_no, row in enumerate(csv.reader(StringIO(content)), start=1):
        if not row or not any(cell.strip() for cell in row):
            continue
        first = row[0].strip()
        if first.startswith("#"):
            match = _TOTAL_RE.match(first)
            if match and len(row) > 1:
                term = parse_term_label(match.group(1))
                semester = semesters.setdefault(term, ExportedSemester(term=term))
                semester.total_credits = _parse_int(row[1], line_no)
            continue
        if first == CSV_HEADERS[0]:
            continue
        if len(row) < len(CSV_HEADERS):
            raise InputValidationError(f"Line {line_no}: expected at least {len(CSV_HEADERS)} columns")

        term = Term(parse_season(row[0]), _parse_int(row[1], line_no))
        semester = semesters.setdefault(term, ExportedSemester(term=term))
        semester.courses.append(
            ExportedCourse(
                course_id=row[2],
                name=row[3],
                credits=_parse_int(row[4], line_no),
                prerequisites=_split(row[5]) if len(row) > 5 else [],
                satisfies=_split(row[6]) if len(row) > 6 else [],
            )
        )
    return list(semesters.values())


def export_plan_json(plan: PlanGenerateResponse) -> str:
    return plan.model_dump_json(by_alias=True, indent=2)


def render_export(
    plan: PlanGenerateResponse,
    fmt: str = "csv",
    include_details: bool = True,
    majors: Sequence[str] = (),
    minors: Sequence[str] = (),
) -> ExportResult:
    fmt = fmt.lower()
    if fmt == "csv":
        return ExportResult(
            body=export_plan_csv(plan, include_details, majors, minors),
            media_type="text/csv",
            filename="graduation-plan.csv",
        )
    if fmt == "json":
        return ExportResult(
            body=export_plan_json(plan),
            media_type="application/json",
            filename="graduation-plan.json",
        )
    raise InputValidationError(f"Unsupported export format '{fmt}'. Must be one of: ['csv', 'json']")


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(";") if part.strip()]


def _parse_int(value: str, line_no: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise InputValidationError(f"Line {line_no}: '{value}' is not a whole number") from None
