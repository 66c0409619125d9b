# eduai/api/v1/endpoints/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eduai.core.security import get_current_user
from eduai.db.session import get_db
from eduai.models.profile import Profile
from eduai.schemas.profile import ProfilePublic, ProfileUpdate
from eduai.services import profile_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=ProfilePublic)
def read_me(current_user: Profile = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=ProfilePublic)
def update_me(
    obj_in: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    # role is not part of ProfileUpdate; see /admin/profiles/{id}/role
    return profile_service.update_own_profile(
        db, profile=current_user, full_name=obj_in.full_name
    )
