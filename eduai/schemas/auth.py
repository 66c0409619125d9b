# eduai/schemas/auth.py
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from eduai.schemas.profile import ProfilePublic


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str | None = None
    role: Literal["admin", "lecturer"] | None = None  # 默认 lecturer


class IdentityPublic(BaseModel):
    id: int
    email: EmailStr
    user_metadata: dict = {}
    created_at: datetime | None = None
    last_sign_in_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class SessionToken(Token):
    """Login / refresh response: the token plus who it belongs to."""
    user: IdentityPublic
    profile: ProfilePublic


class SessionPublic(BaseModel):
    """Current session as seen by a client bootstrapping from a stored token."""
    user: IdentityPublic
    profile: ProfilePublic
