# eduai/api/v1/endpoints/auth.py
from fastapi import APIRouter, Depends, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from eduai.core.security import get_current_identity, get_current_session
from eduai.db.session import get_db
from eduai.models.identity import AuthSession, Identity
from eduai.schemas.auth import (
    LoginRequest,
    IdentityPublic,
    RegisterRequest,
    SessionPublic,
    SessionToken,
    Token,
)
from eduai.schemas.profile import ProfilePublic
from eduai.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_token(signed_in: auth_service.SignedInSession) -> SessionToken:
    return SessionToken(
        access_token=signed_in.access_token,
        user=IdentityPublic.model_validate(signed_in.identity),
        profile=ProfilePublic.model_validate(signed_in.profile),
    )


@router.post("/register", response_model=ProfilePublic, status_code=status.HTTP_201_CREATED)
def register_user(payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Create an account; its profile is created in the same transaction.
    """
    return auth_service.sign_up(
        db,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
        role=payload.role,
    )


@router.post("/login", response_model=SessionToken)
def login_for_access_token(
    payload: LoginRequest,
    db: Session = Depends(get_db),
):
    signed_in = auth_service.sign_in(db, email=payload.email, password=payload.password)
    return _session_token(signed_in)


# OAuth2 form login, used by the "Authorize" button in the API docs
@router.post("/token", response_model=Token)
def login_for_access_token_form(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """
    username 字段请填写邮箱地址
    """
    signed_in = auth_service.sign_in(
        db, email=form_data.username, password=form_data.password
    )
    return Token(access_token=signed_in.access_token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    auth_session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    auth_service.sign_out(db, auth_session=auth_session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/refresh", response_model=SessionToken)
def refresh(
    auth_session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    signed_in = auth_service.refresh_session(db, auth_session=auth_session)
    return _session_token(signed_in)


@router.get("/session", response_model=SessionPublic)
def read_session(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Bootstrap call for clients holding a stored token.
    """
    identity, profile = auth_service.get_session(db, identity=identity)
    return {"user": identity, "profile": profile}
