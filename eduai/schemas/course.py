from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class CourseBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = ""
    code: str = Field(min_length=1, max_length=50)


class CourseCreate(CourseBase):
    pass


class CourseUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    code: str | None = Field(default=None, min_length=1, max_length=50)

    # may be omitted, but not cleared
    @field_validator("title", "code")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class CoursePublic(CourseBase):
    id: int
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
