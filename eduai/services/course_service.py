# eduai/services/course_service.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eduai.core.errors import ConflictError
from eduai.models.course import Course
from eduai.models.profile import Profile
from eduai.schemas.course import CourseCreate, CourseUpdate

logger = logging.getLogger(__name__)


def _code_taken(db: Session, code: str, course_id: int | None) -> bool:
    query = db.query(Course.id).filter(Course.code == code)
    if course_id is not None:
        query = query.filter(Course.id != course_id)
    return query.first() is not None


def _commit_unique_code(db: Session, code: str, course_id: int | None = None) -> None:
    """
    Commit a course write; only a clash on the unique code becomes a
    ConflictError, other integrity failures propagate.
    """
    if _code_taken(db, code, course_id):
        db.rollback()
        raise ConflictError(f"Course code '{code}' already exists")
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if _code_taken(db, code, course_id):
            raise ConflictError(f"Course code '{code}' already exists")
        raise


def create_course(
    db: Session,
    *,
    admin: Profile,
    obj_in: CourseCreate,
) -> Course:
    db_obj = Course(
        title=obj_in.title,
        description=obj_in.description or "",
        code=obj_in.code,
        created_by=admin.id,
    )
    db.add(db_obj)
    _commit_unique_code(db, obj_in.code)
    db.refresh(db_obj)
    logger.info(f"Course {db_obj.code} created by profile {admin.id}")
    return db_obj


def get_course(db: Session, course_id: int) -> Optional[Course]:
    return db.get(Course, course_id)


def list_courses(
    db: Session,
    *,
    skip: int = 0,
    limit: int = 100,
) -> List[Course]:
    """
    any authenticated caller can read the whole catalog
    """
    return (
        db.query(Course)
        .order_by(Course.code.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def update_course(
    db: Session,
    *,
    db_obj: Course,
    obj_in: CourseUpdate,
) -> Course:
    update_data = obj_in.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_obj, field, value)
    db.add(db_obj)
    _commit_unique_code(db, db_obj.code, course_id=db_obj.id)
    db.refresh(db_obj)
    return db_obj


def delete_course(db: Session, *, db_obj: Course) -> None:
    # assignments and generated content go with it (ON DELETE CASCADE)
    code = db_obj.code
    db.delete(db_obj)
    db.commit()
    logger.info(f"Course {code} deleted")
