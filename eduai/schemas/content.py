# eduai/schemas/content.py
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from eduai.schemas.course import CoursePublic
from eduai.schemas.profile import ProfilePublic

ContentType = Literal["lesson", "assignment", "quiz", "notes", "summary"]


class ContentGenerateRequest(BaseModel):
    course_id: int
    content_type: ContentType = "lesson"
    # blank -> default prompt for the course and content type
    prompt: str | None = Field(default=None, max_length=8000)


class ContentPublic(BaseModel):
    id: int
    course_id: int
    lecturer_id: int
    content_type: str
    title: str
    content: str
    prompt_used: str | None = None
    created_at: datetime | None = None
    course: CoursePublic | None = None

    model_config = {"from_attributes": True}


class ContentWithLecturer(ContentPublic):
    lecturer: ProfilePublic | None = None


class LecturerDashboard(BaseModel):
    assigned_courses: int
    content_generated: int
    recent_activity: int


class AdminDashboard(BaseModel):
    total_lecturers: int
    total_courses: int
    total_assignments: int
    recent_content: list[ContentWithLecturer]
