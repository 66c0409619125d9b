# eduai/models/generated_content.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from eduai.db.base import Base


class GeneratedContent(Base):
    """Append-only history of generated artifacts."""

    __tablename__ = "generated_content"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    lecturer_id = Column(
        Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # lesson / assignment / quiz / notes / summary
    content_type = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    prompt_used = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    course = relationship("Course", lazy="joined")
    lecturer = relationship("Profile", lazy="joined")
