from sqlalchemy import Column, Integer, String, UniqueConstraint

from app.models.base import Base


class Prerequisite(Base):
    """Directed edge: ``prereq_code`` must be completed before ``course_code``."""

    __tablename__ = "prerequisites"
    __table_args__ = (
        UniqueConstraint("course_code", "prereq_code", "relation", name="uq_prerequisite_edge"),
    )

    id = Column(Integer, primary_key=True, index=True)
    course_code = Column(String, nullable=False, index=True)
    prereq_code = Column(String, nullable=False, index=True)
    # Only "required" edges gate placement; coreq/optional are kept for reference
    relation = Column(String, nullable=False, default="required")
