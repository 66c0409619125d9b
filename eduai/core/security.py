# eduai/core/security.py
"""
Password hashing, session tokens and the per-request access dependencies.

Tokens are JWTs whose `jti` names an AuthSession row; signing out revokes the
row, so a token stops working before it expires.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from eduai.core.config import settings
from eduai.core.errors import AuthError, PermissionDeniedError
from eduai.db.session import get_db
from eduai.models.identity import AuthSession, Identity
from eduai.models.profile import Profile
from eduai.services.profile_service import fetch_or_create_profile

logger = logging.getLogger(__name__)

# bcrypt is kept only to verify hashes created by older deployments
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(plain_password, password_hash)
    except ValueError:
        # unknown / malformed hash
        return False


def authenticate_user(db: Session, email: str, password: str) -> Optional[Identity]:
    identity = db.query(Identity).filter(Identity.email == email.lower()).first()
    if identity is None:
        return None
    if not verify_password(password, identity.password_hash):
        return None
    return identity


def create_access_token(
    data: dict,
    expires_delta: timedelta | None = None,
) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except jwt.ExpiredSignatureError:
        raise AuthError("Session expired")
    except jwt.InvalidTokenError:
        raise AuthError("Could not validate credentials")

    if not payload.get("sub") or not payload.get("jti"):
        raise AuthError("Could not validate credentials")
    return payload


def issue_session(db: Session, identity: Identity) -> tuple[AuthSession, str]:
    """Create a session row and the token that refers to it. Caller commits."""
    auth_session = AuthSession(id=uuid.uuid4().hex, identity_id=identity.id)
    db.add(auth_session)
    token = create_access_token(
        data={"sub": str(identity.id), "email": identity.email, "jti": auth_session.id}
    )
    return auth_session, token


def get_current_session(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> AuthSession:
    if not token:
        raise AuthError("Not authenticated")

    payload = decode_access_token(token)
    auth_session = db.get(AuthSession, payload["jti"])
    if auth_session is None or auth_session.revoked_at is not None:
        raise AuthError("Session has been signed out")
    if str(auth_session.identity_id) != str(payload["sub"]):
        raise AuthError("Could not validate credentials")
    return auth_session


def get_current_identity(
    auth_session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> Identity:
    identity = db.get(Identity, auth_session.identity_id)
    if identity is None:
        raise AuthError("Account no longer exists")
    return identity


def get_current_user(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> Profile:
    """The caller's profile, created on first access if it is missing."""
    return fetch_or_create_profile(db, identity)


def get_current_admin(current_user: Profile = Depends(get_current_user)) -> Profile:
    if not current_user.is_admin:
        raise PermissionDeniedError("Admin role required")
    return current_user


def get_current_lecturer(current_user: Profile = Depends(get_current_user)) -> Profile:
    if not current_user.is_lecturer:
        raise PermissionDeniedError("Lecturer role required")
    return current_user
