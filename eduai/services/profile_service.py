# eduai/services/profile_service.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eduai.core.errors import ConflictError, NotFoundError, ValidationFailedError
from eduai.models.course_assignment import CourseAssignment
from eduai.models.generated_content import GeneratedContent
from eduai.models.identity import Identity
from eduai.models.profile import ROLE_LECTURER, ROLES, Profile

logger = logging.getLogger(__name__)


def _profile_from_identity(identity: Identity, default_name: str) -> Profile:
    metadata = identity.user_metadata or {}
    role = metadata.get("role") or ROLE_LECTURER
    if role not in ROLES:
        role = ROLE_LECTURER
    return Profile(
        id=identity.id,
        email=identity.email,
        full_name=metadata.get("full_name") or default_name,
        role=role,
    )


def create_profile_for_identity(db: Session, identity: Identity) -> Profile:
    """
    Registration hook: mirror a new identity into a profile.
    Runs inside the caller's transaction; the caller commits.
    """
    profile = _profile_from_identity(identity, default_name="New User")
    db.add(profile)
    return profile


def get_profile(db: Session, profile_id: int) -> Optional[Profile]:
    return db.get(Profile, profile_id)


def fetch_or_create_profile(db: Session, identity: Identity) -> Profile:
    """
    Read the identity's profile; if it is missing (account created outside
    the normal sign-up path) build it from the identity's metadata.
    """
    profile = db.get(Profile, identity.id)
    if profile is not None:
        return profile

    logger.info(f"Profile not found for identity {identity.id}, creating it")
    profile = _profile_from_identity(identity, default_name="User")
    db.add(profile)
    try:
        db.commit()
    except IntegrityError:
        # created by a concurrent request
        db.rollback()
        profile = db.get(Profile, identity.id)
        if profile is None:
            raise
        return profile

    db.refresh(profile)
    logger.info(f"Profile created for identity {identity.id} with role={profile.role}")
    return profile


def list_profiles(
    db: Session,
    *,
    role: str | None = None,
    skip: int = 0,
    limit: int = 100,
) -> List[Profile]:
    query = db.query(Profile)
    if role is not None:
        query = query.filter(Profile.role == role)
    return (
        query.order_by(Profile.created_at.desc(), Profile.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def update_own_profile(db: Session, *, profile: Profile, full_name: str) -> Profile:
    profile.full_name = full_name
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def _has_lecturer_rows(db: Session, profile_id: int) -> bool:
    assigned = (
        db.query(CourseAssignment.id)
        .filter(CourseAssignment.lecturer_id == profile_id)
        .first()
    )
    if assigned is not None:
        return True
    return (
        db.query(GeneratedContent.id)
        .filter(GeneratedContent.lecturer_id == profile_id)
        .first()
        is not None
    )


def set_role(
    db: Session,
    *,
    profile_id: int,
    role: str,
    acting_admin: Profile | None = None,
) -> Profile:
    """
    Privileged path: the only way a profile's role changes.
      - an admin cannot change their own role
      - a profile that owns assignments or generated content stays a lecturer
    """
    if role not in ROLES:
        raise ValidationFailedError(f"Unknown role: {role}")

    profile = db.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError("Profile not found")

    if acting_admin is not None and acting_admin.id == profile.id and role != profile.role:
        raise ValidationFailedError("Admins cannot change their own role")

    if role != ROLE_LECTURER and _has_lecturer_rows(db, profile.id):
        raise ConflictError(
            "Profile still has course assignments or generated content"
        )

    profile.role = role
    identity = db.get(Identity, profile_id)
    if identity is not None:
        identity.user_metadata = {**(identity.user_metadata or {}), "role": role}
        db.add(identity)

    db.add(profile)
    db.commit()
    db.refresh(profile)
    logger.info(f"Role of profile {profile_id} set to {role}")
    return profile
