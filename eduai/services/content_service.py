# eduai/services/content_service.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from eduai.core.errors import NotFoundError, PermissionDeniedError
from eduai.models.course import Course
from eduai.models.generated_content import GeneratedContent
from eduai.models.profile import ROLE_LECTURER, Profile
from eduai.schemas.content import ContentGenerateRequest
from eduai.services.assignment_service import count_assignments, is_assigned
from eduai.services.llm_client import build_default_prompt, generate_course_content

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_WINDOW = timedelta(days=7)


def _content_title(content_type: str, course: Course) -> str:
    return f"{content_type.capitalize()}: {course.title or 'Course Content'}"


def generate_content(
    db: Session,
    *,
    lecturer: Profile,
    obj_in: ContentGenerateRequest,
) -> GeneratedContent:
    """
    Lecturer generates content for one of their assigned courses:
      - the course must exist and be assigned to the lecturer
      - blank prompt -> default prompt for the course and content type
      - one GeneratedContent row is appended with the prompt used
    """
    course: Optional[Course] = db.get(Course, obj_in.course_id)
    if course is None:
        raise NotFoundError("Course not found")

    if not is_assigned(db, course_id=course.id, lecturer_id=lecturer.id):
        raise PermissionDeniedError("Course is not assigned to you")

    final_prompt = (obj_in.prompt or "").strip() or build_default_prompt(
        course.title, course.code, course.description, obj_in.content_type
    )

    content = generate_course_content(final_prompt, obj_in.content_type)

    db_obj = GeneratedContent(
        course_id=course.id,
        lecturer_id=lecturer.id,
        content_type=obj_in.content_type,
        title=_content_title(obj_in.content_type, course),
        content=content,
        prompt_used=final_prompt,
    )
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)

    logger.info(
        f"Stored {obj_in.content_type} content {db_obj.id} "
        f"for course {course.id} by lecturer {lecturer.id}"
    )
    return db_obj


def get_content(db: Session, content_id: int) -> Optional[GeneratedContent]:
    return db.get(GeneratedContent, content_id)


def get_content_for_reader(
    db: Session,
    *,
    reader: Profile,
    content_id: int,
) -> GeneratedContent:
    """
    Lecturers only see their own rows; someone else's row reads as missing.
    """
    content = get_content(db, content_id)
    if content is None:
        raise NotFoundError("Content not found")
    if not reader.is_admin and content.lecturer_id != reader.id:
        raise NotFoundError("Content not found")
    return content


def list_content_for_lecturer(
    db: Session,
    *,
    lecturer: Profile,
    course_id: int | None = None,
    skip: int = 0,
    limit: int = 100,
) -> List[GeneratedContent]:
    query = db.query(GeneratedContent).filter(
        GeneratedContent.lecturer_id == lecturer.id
    )
    if course_id is not None:
        query = query.filter(GeneratedContent.course_id == course_id)
    return (
        query.order_by(GeneratedContent.created_at.desc(), GeneratedContent.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def list_recent_content(db: Session, *, limit: int = 10) -> List[GeneratedContent]:
    """
    Admin view: newest content across all lecturers.
    """
    return (
        db.query(GeneratedContent)
        .order_by(GeneratedContent.created_at.desc(), GeneratedContent.id.desc())
        .limit(limit)
        .all()
    )


def lecturer_dashboard(db: Session, *, lecturer: Profile) -> dict:
    base = db.query(GeneratedContent).filter(
        GeneratedContent.lecturer_id == lecturer.id
    )
    since = datetime.now(timezone.utc) - RECENT_ACTIVITY_WINDOW
    return {
        "assigned_courses": count_assignments(db, lecturer=lecturer),
        "content_generated": base.count(),
        "recent_activity": base.filter(GeneratedContent.created_at >= since).count(),
    }


def admin_dashboard(db: Session, *, recent_limit: int = 10) -> dict:
    return {
        "total_lecturers": db.query(Profile).filter(Profile.role == ROLE_LECTURER).count(),
        "total_courses": db.query(Course).count(),
        "total_assignments": count_assignments(db),
        "recent_content": list_recent_content(db, limit=recent_limit),
    }
