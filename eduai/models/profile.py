# eduai/models/profile.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func
from eduai.db.base import Base

ROLE_ADMIN = "admin"
ROLE_LECTURER = "lecturer"
ROLES = (ROLE_ADMIN, ROLE_LECTURER)


class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'lecturer')", name="ck_profiles_role"),
    )

    # same id as the identity it mirrors
    id = Column(
        Integer,
        ForeignKey("identities.id", ondelete="CASCADE"),
        primary_key=True,
    )
    email = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(255), nullable=False, default="")
    role = Column(String(20), nullable=False, default=ROLE_LECTURER, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_lecturer(self) -> bool:
        return self.role == ROLE_LECTURER
