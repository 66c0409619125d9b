# eduai/api/v1/endpoints/courses.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from eduai.core.security import get_current_admin, get_current_user
from eduai.db.session import get_db
from eduai.models.profile import Profile
from eduai.schemas.course import CourseCreate, CoursePublic, CourseUpdate
from eduai.services import course_service

router = APIRouter(prefix="/courses", tags=["courses"])


@router.post("/", response_model=CoursePublic, status_code=status.HTTP_201_CREATED)
def create_course(
    obj_in: CourseCreate,
    db: Session = Depends(get_db),
    current_admin: Profile = Depends(get_current_admin),
):
    return course_service.create_course(db, admin=current_admin, obj_in=obj_in)


@router.get("/", response_model=List[CoursePublic])
def list_courses(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),  # admin 和 lecturer 都能看
    skip: int = 0,
    limit: int = 100,
):
    return course_service.list_courses(db, skip=skip, limit=limit)


@router.get("/{course_id}", response_model=CoursePublic)
def get_course(
    course_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    course = course_service.get_course(db, course_id)
    if not course:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Course not found",
        )
    return course


@router.put("/{course_id}", response_model=CoursePublic)
def update_course(
    course_id: int,
    obj_in: CourseUpdate,
    db: Session = Depends(get_db),
    current_admin: Profile = Depends(get_current_admin),
):
    course = course_service.get_course(db, course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return course_service.update_course(db, db_obj=course, obj_in=obj_in)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(
    course_id: int,
    db: Session = Depends(get_db),
    current_admin: Profile = Depends(get_current_admin),
):
    course = course_service.get_course(db, course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    course_service.delete_course(db, db_obj=course)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
