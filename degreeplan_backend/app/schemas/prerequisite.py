from typing import Literal

from pydantic import BaseModel, Field, model_validator


class PrerequisiteCreate(BaseModel):
    course_code: str = Field(min_length=1)
    prereq_code: str = Field(min_length=1)
    relation: Literal["required", "coreq", "optional"] = "required"

    @model_validator(mode="after")
    def _not_self_referencing(self):
        if self.course_code == self.prereq_code:
            raise ValueError(f"{self.course_code} cannot be its own prerequisite")
        return self


class PrerequisiteCreateRequest(BaseModel):
    prerequisites: list[PrerequisiteCreate]


class PrerequisiteResponse(BaseModel):
    id: int
    course_code: str
    prereq_code: str
    relation: str

    model_config = {
        "from_attributes": True,
    }
