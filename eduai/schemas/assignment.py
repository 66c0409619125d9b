# eduai/schemas/assignment.py
from datetime import datetime

from pydantic import BaseModel

from eduai.schemas.course import CoursePublic
from eduai.schemas.profile import ProfilePublic


class AssignmentCreate(BaseModel):
    course_id: int
    lecturer_id: int


class AssignmentPublic(BaseModel):
    id: int
    course_id: int
    lecturer_id: int
    assigned_at: datetime | None = None
    assigned_by: int | None = None
    course: CoursePublic | None = None
    # only filled in for admins
    lecturer: ProfilePublic | None = None

    model_config = {"from_attributes": True}
