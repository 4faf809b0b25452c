from sqlalchemy import Column, String, Text, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobportal.database import Base

ROLES = ("student", "admin")


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone_number = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="student")  # student | admin

    # Profile
    bio = Column(Text, default="")
    skills = Column(JSON, default=list)
    resume = Column(String)  # reference only, files are stored elsewhere
    resume_original_name = Column(String)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    companies = relationship("Company", back_populates="owner")
    jobs = relationship("Job", back_populates="creator")
    applications = relationship("Application", back_populates="applicant")
