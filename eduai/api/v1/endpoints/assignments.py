# eduai/api/v1/endpoints/assignments.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from eduai.core.security import get_current_admin, get_current_user
from eduai.db.session import get_db
from eduai.models.course_assignment import CourseAssignment
from eduai.models.profile import Profile
from eduai.schemas.assignment import AssignmentCreate, AssignmentPublic
from eduai.services import assignment_service

router = APIRouter(prefix="/assignments", tags=["assignments"])


def _assignment_to_public(
    assignment: CourseAssignment, *, include_lecturer: bool
) -> AssignmentPublic:
    public = AssignmentPublic.model_validate(assignment)
    if not include_lecturer:
        public.lecturer = None
    return public


@router.post("/", response_model=AssignmentPublic, status_code=status.HTTP_201_CREATED)
def assign_course(
    obj_in: AssignmentCreate,
    db: Session = Depends(get_db),
    current_admin: Profile = Depends(get_current_admin),
):
    assignment = assignment_service.assign_course(
        db,
        admin=current_admin,
        course_id=obj_in.course_id,
        lecturer_id=obj_in.lecturer_id,
    )
    return _assignment_to_public(assignment, include_lecturer=True)


@router.get("/", response_model=List[AssignmentPublic])
def list_assignments(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
    skip: int = 0,
    limit: int = 100,
):
    """
    admin: all assignments; lecturer: only their own.
    """
    if current_user.is_admin:
        assignments = assignment_service.list_all_assignments(db, skip=skip, limit=limit)
    else:
        assignments = assignment_service.list_assignments_for_lecturer(
            db, lecturer=current_user, skip=skip, limit=limit
        )
    return [
        _assignment_to_public(a, include_lecturer=current_user.is_admin)
        for a in assignments
    ]


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
def unassign_course(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_admin: Profile = Depends(get_current_admin),
):
    assignment = assignment_service.get_assignment(db, assignment_id)
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")
    assignment_service.unassign_course(db, db_obj=assignment)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
