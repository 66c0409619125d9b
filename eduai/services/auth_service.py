# eduai/services/auth_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eduai.core.config import settings
from eduai.core.errors import AuthError, ConflictError, PermissionDeniedError
from eduai.core.security import authenticate_user, get_password_hash, issue_session
from eduai.models.identity import AuthSession, Identity
from eduai.models.profile import ROLE_ADMIN, ROLE_LECTURER, Profile
from eduai.services.profile_service import (
    create_profile_for_identity,
    fetch_or_create_profile,
)

logger = logging.getLogger(__name__)


@dataclass
class SignedInSession:
    access_token: str
    identity: Identity
    profile: Profile


def _create_account(
    db: Session,
    *,
    email: str,
    password: str,
    full_name: str | None,
    role: str,
) -> Profile:
    email = email.lower()
    if db.query(Identity).filter(Identity.email == email).first():
        raise ConflictError("Email already registered")

    metadata = {"role": role}
    if full_name:
        metadata["full_name"] = full_name

    identity = Identity(
        email=email,
        password_hash=get_password_hash(password),
        user_metadata=metadata,
    )
    db.add(identity)
    try:
        db.flush()
        profile = create_profile_for_identity(db, identity)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already registered")

    db.refresh(profile)
    logger.info(f"Registered {email} as {profile.role}")
    return profile


def sign_up(
    db: Session,
    *,
    email: str,
    password: str,
    full_name: str | None = None,
    role: str | None = None,
) -> Profile:
    """
    Public registration. Creates the identity and exactly one profile;
    role is lecturer unless admin is asked for explicitly.
    """
    role = role or ROLE_LECTURER
    if role == ROLE_ADMIN and not settings.ALLOW_ADMIN_SIGNUP:
        raise PermissionDeniedError("Admin accounts can only be created by an admin")
    return _create_account(
        db, email=email, password=password, full_name=full_name, role=role
    )


def admin_create_user(
    db: Session,
    *,
    email: str,
    password: str,
    full_name: str,
    role: str = ROLE_LECTURER,
) -> Profile:
    return _create_account(
        db, email=email, password=password, full_name=full_name, role=role
    )


def sign_in(db: Session, *, email: str, password: str) -> SignedInSession:
    identity = authenticate_user(db, email, password)
    if identity is None:
        raise AuthError("Incorrect email or password")

    identity.last_sign_in_at = datetime.now(timezone.utc)
    _, token = issue_session(db, identity)
    db.add(identity)
    db.commit()
    db.refresh(identity)

    profile = fetch_or_create_profile(db, identity)
    logger.info(f"Signed in identity {identity.id} ({profile.role})")
    return SignedInSession(access_token=token, identity=identity, profile=profile)


def sign_out(db: Session, *, auth_session: AuthSession) -> None:
    auth_session.revoked_at = datetime.now(timezone.utc)
    db.add(auth_session)
    db.commit()
    logger.info(f"Signed out identity {auth_session.identity_id}")


def refresh_session(db: Session, *, auth_session: AuthSession) -> SignedInSession:
    """Swap the current token for a fresh one; the old token is revoked."""
    identity = db.get(Identity, auth_session.identity_id)
    if identity is None:
        raise AuthError("Account no longer exists")

    auth_session.revoked_at = datetime.now(timezone.utc)
    db.add(auth_session)
    _, token = issue_session(db, identity)
    db.commit()

    profile = fetch_or_create_profile(db, identity)
    return SignedInSession(access_token=token, identity=identity, profile=profile)


def get_session(db: Session, *, identity: Identity) -> tuple[Identity, Profile]:
    return identity, fetch_or_create_profile(db, identity)
