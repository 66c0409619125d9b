# eduai/schemas/profile.py
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

Role = Literal["admin", "lecturer"]


class ProfilePublic(BaseModel):
    id: int
    email: EmailStr
    full_name: str
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class ProfileUpdate(BaseModel):
    """Users may only rename themselves; role changes go through the admin API."""
    full_name: str = Field(min_length=1, max_length=255)


class RoleUpdate(BaseModel):
    role: Role


class AdminUserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str
    role: Role = "lecturer"
