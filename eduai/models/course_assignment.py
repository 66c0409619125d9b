# eduai/models/course_assignment.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from eduai.db.base import Base


class CourseAssignment(Base):
    __tablename__ = "course_assignments"
    __table_args__ = (
        UniqueConstraint("course_id", "lecturer_id", name="uq_course_lecturer"),
    )

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    lecturer_id = Column(
        Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_at = Column(DateTime(timezone=True), server_default=func.now())
    assigned_by = Column(
        Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True
    )

    course = relationship("Course", lazy="joined")
    lecturer = relationship("Profile", foreign_keys=[lecturer_id], lazy="joined")
