# eduai/api/v1/endpoints/admin.py
from typing import List, Literal

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eduai.core.security import get_current_admin
from eduai.db.session import get_db
from eduai.models.profile import Profile
from eduai.schemas.content import AdminDashboard
from eduai.schemas.profile import AdminUserCreate, ProfilePublic, RoleUpdate
from eduai.services import auth_service, content_service, profile_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/users", response_model=ProfilePublic, status_code=status.HTTP_201_CREATED)
def create_user(
    obj_in: AdminUserCreate,
    db: Session = Depends(get_db),
    current_admin: Profile = Depends(get_current_admin),
):
    return auth_service.admin_create_user(
        db,
        email=obj_in.email,
        password=obj_in.password,
        full_name=obj_in.full_name,
        role=obj_in.role,
    )


@router.get("/profiles", response_model=List[ProfilePublic])
def list_profiles(
    role: Literal["admin", "lecturer"] | None = None,
    db: Session = Depends(get_db),
    current_admin: Profile = Depends(get_current_admin),
    skip: int = 0,
    limit: int = 100,
):
    return profile_service.list_profiles(db, role=role, skip=skip, limit=limit)


@router.put("/profiles/{profile_id}/role", response_model=ProfilePublic)
def update_role(
    profile_id: int,
    obj_in: RoleUpdate,
    db: Session = Depends(get_db),
    current_admin: Profile = Depends(get_current_admin),
):
    return profile_service.set_role(
        db, profile_id=profile_id, role=obj_in.role, acting_admin=current_admin
    )


@router.get("/dashboard", response_model=AdminDashboard)
def dashboard(
    db: Session = Depends(get_db),
    current_admin: Profile = Depends(get_current_admin),
):
    return content_service.admin_dashboard(db)
