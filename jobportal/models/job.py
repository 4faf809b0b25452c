from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, Float, Integer, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobportal.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(JSON, nullable=False, default=list)
    salary = Column(Float, nullable=False)
    location = Column(String, nullable=False)
    job_type = Column(String, nullable=False)
    experience_level = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False)
    company_id = Column(String, ForeignKey("companies.id"), nullable=False, index=True)
    created_by = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    # Set client side so newest-first ordering is stable within the same second
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    company = relationship("Company", back_populates="jobs")
    creator = relationship("User", back_populates="jobs")
    applications = relationship(
        "Application",
        back_populates="job",
        order_by="Application.created_at.desc()",
    )
