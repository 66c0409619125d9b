# eduai/services/assignment_service.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eduai.core.errors import ConflictError, NotFoundError, ValidationFailedError
from eduai.models.course import Course
from eduai.models.course_assignment import CourseAssignment
from eduai.models.profile import Profile

logger = logging.getLogger(__name__)


def assign_course(
    db: Session,
    *,
    admin: Profile,
    course_id: int,
    lecturer_id: int,
) -> CourseAssignment:
    """
    Link a lecturer to a course. The pair is unique.
    """
    if db.get(Course, course_id) is None:
        raise NotFoundError("Course not found")

    lecturer = db.get(Profile, lecturer_id)
    if lecturer is None:
        raise NotFoundError("Lecturer not found")
    if not lecturer.is_lecturer:
        raise ValidationFailedError("Courses can only be assigned to lecturers")

    existing = (
        db.query(CourseAssignment)
        .filter(
            CourseAssignment.course_id == course_id,
            CourseAssignment.lecturer_id == lecturer_id,
        )
        .first()
    )
    if existing is not None:
        raise ConflictError("Course is already assigned to this lecturer")

    db_obj = CourseAssignment(
        course_id=course_id,
        lecturer_id=lecturer_id,
        assigned_by=admin.id,
    )
    db.add(db_obj)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Course is already assigned to this lecturer")

    db.refresh(db_obj)
    logger.info(f"Course {course_id} assigned to lecturer {lecturer_id} by {admin.id}")
    return db_obj


def get_assignment(db: Session, assignment_id: int) -> Optional[CourseAssignment]:
    return db.get(CourseAssignment, assignment_id)


def is_assigned(db: Session, *, course_id: int, lecturer_id: int) -> bool:
    return (
        db.query(CourseAssignment.id)
        .filter(
            CourseAssignment.course_id == course_id,
            CourseAssignment.lecturer_id == lecturer_id,
        )
        .first()
        is not None
    )


def list_assignments_for_lecturer(
    db: Session,
    *,
    lecturer: Profile,
    skip: int = 0,
    limit: int = 100,
) -> List[CourseAssignment]:
    return (
        db.query(CourseAssignment)
        .filter(CourseAssignment.lecturer_id == lecturer.id)
        .order_by(CourseAssignment.assigned_at.desc(), CourseAssignment.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def list_all_assignments(
    db: Session,
    *,
    skip: int = 0,
    limit: int = 100,
) -> List[CourseAssignment]:
    return (
        db.query(CourseAssignment)
        .order_by(CourseAssignment.assigned_at.desc(), CourseAssignment.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def count_assignments(db: Session, *, lecturer: Profile | None = None) -> int:
    query = db.query(CourseAssignment)
    if lecturer is not None:
        query = query.filter(CourseAssignment.lecturer_id == lecturer.id)
    return query.count()


def unassign_course(db: Session, *, db_obj: CourseAssignment) -> None:
    db.delete(db_obj)
    db.commit()
