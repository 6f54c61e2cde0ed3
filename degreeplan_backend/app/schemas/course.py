from pydantic import BaseModel, Field


class CourseCreate(BaseModel):
    code: str = Field(min_length=1)
    title: str | None = None
    credits: int | None = Field(None, ge=0)


class CourseCreateRequest(BaseModel):
    courses: list[CourseCreate]


class CourseResponse(CourseCreate):
    id: int

    model_config = {
        "from_attributes": True,
    }


class CourseInfoResponse(BaseModel):
    course_id: str
    name: str
    credits: int
    prerequisites: list[str] = []
    corequisites: list[str] = []
    # True when the catalog had no entry and placeholder values were used
    is_stub: bool = False
