from pydantic import BaseModel, Field, field_validator, model_validator

from app.services.terms import Season, Term, parse_term_label


class CamelModel(BaseModel):
    # Accept both the camelCase wire names and the python field names
    model_config = {"populate_by_name": True}


class TermIn(BaseModel):
    season: Season
    year: int = Field(ge=1900, le=2999)

    @model_validator(mode="before")
    @classmethod
    def _from_label(cls, value):
        # "Fall 2024" is accepted alongside {"season": "fall", "year": 2024}
        if isinstance(value, str):
            term = parse_term_label(value)
            return {"season": term.season, "year": term.year}
        return value

    @field_validator("season", mode="before")
    @classmethod
    def _normalize_season(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_term(self) -> Term:
        return Term(self.season, self.year)


class RequirementIn(CamelModel):
    category: str = Field(min_length=1)
    courses: list[str] = []
    credits_target: int | None = Field(None, alias="creditsTarget", ge=0)


class ProgramIn(BaseModel):
    code: str = Field(min_length=1)
    name: str | None = None
    requirements: list[RequirementIn] = []


class CompletedCourseIn(BaseModel):
    course_id: str = Field(min_length=1)
    credits: int = Field(ge=0)


class PlanGenerateRequest(CamelModel):
    majors: list[ProgramIn] = Field(min_length=1)
    minors: list[ProgramIn] = []
    completed_courses: list[CompletedCourseIn] = Field(
        default_factory=list, alias="completedCourses"
    )
    starting_term: TermIn = Field(alias="startingTerm")
    target_term: TermIn = Field(alias="targetTerm")
    max_credits_per_semester: int = Field(gt=0, alias="maxCreditsPerSemester")


class PlannedCourseOut(BaseModel):
    course_id: str
    name: str
    credits: int
    prerequisites: list[str] = []
    satisfies: list[str] = []


class SemesterOut(CamelModel):
    season: Season
    year: int
    courses: list[PlannedCourseOut] = []
    total_credits: int = Field(alias="totalCredits")

    @property
    def label(self) -> str:
        return self.to_term().label

    def to_term(self) -> Term:
        return Term(self.season, self.year)


class PlanGenerateResponse(CamelModel):
    semesters: list[SemesterOut] = []
    total_credits: int = Field(alias="totalCredits")
    completion_term: str | None = Field(None, alias="completionTerm")
    warnings: list[str] = []
    unmet_requirements: list[str] = Field(default_factory=list, alias="unmetRequirements")


class PlanExportRequest(CamelModel):
    plan: PlanGenerateResponse
    format: str = "csv"
    include_details: bool = Field(True, alias="includeDetails")
    majors: list[str] = []
    minors: list[str] = []


class PlanReviewRequest(CamelModel):
    plan: PlanGenerateResponse
    completed_courses: list[CompletedCourseIn] = Field(
        default_factory=list, alias="completedCourses"
    )


class PlanReviewResponse(CamelModel):
    is_valid: bool = Field(alias="isValid")
    errors: list[str] = []
    warnings: list[str] = []
    suggestions: list[str] = []
