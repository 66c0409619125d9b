# eduai/api/v1/endpoints/contents.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eduai.core.security import get_current_admin, get_current_lecturer, get_current_user
from eduai.db.session import get_db
from eduai.models.profile import Profile
from eduai.schemas.content import (
    ContentGenerateRequest,
    ContentPublic,
    ContentWithLecturer,
    LecturerDashboard,
)
from eduai.services import content_service

router = APIRouter(prefix="/contents", tags=["contents"])


@router.post("/generate", response_model=ContentPublic, status_code=status.HTTP_201_CREATED)
def generate_content(
    obj_in: ContentGenerateRequest,
    db: Session = Depends(get_db),
    current_lecturer: Profile = Depends(get_current_lecturer),
):
    """
    Generate content for an assigned course and store it.
    Blocks until the model returns the full text.
    """
    return content_service.generate_content(db, lecturer=current_lecturer, obj_in=obj_in)


@router.get("/", response_model=List[ContentPublic])
def list_my_content(
    course_id: int | None = None,
    db: Session = Depends(get_db),
    current_lecturer: Profile = Depends(get_current_lecturer),
    skip: int = 0,
    limit: int = 100,
):
    return content_service.list_content_for_lecturer(
        db, lecturer=current_lecturer, course_id=course_id, skip=skip, limit=limit
    )


@router.get("/dashboard", response_model=LecturerDashboard)
def my_dashboard(
    db: Session = Depends(get_db),
    current_lecturer: Profile = Depends(get_current_lecturer),
):
    return content_service.lecturer_dashboard(db, lecturer=current_lecturer)


@router.get("/recent", response_model=List[ContentWithLecturer])
def list_recent_content(
    limit: int = 10,
    db: Session = Depends(get_db),
    current_admin: Profile = Depends(get_current_admin),
):
    return content_service.list_recent_content(db, limit=limit)


@router.get("/{content_id}", response_model=ContentPublic)
def get_content(
    content_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    return content_service.get_content_for_reader(
        db, reader=current_user, content_id=content_id
    )
