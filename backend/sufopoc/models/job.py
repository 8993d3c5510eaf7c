from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Basic job info
    title = Column(String(150), nullable=False)
    company_name = Column(String(255), nullable=False)
    category = Column(String(50), nullable=False)
    job_type = Column(String(50), nullable=False)
    seniority_level = Column(String(50), nullable=True)
    employment_type = Column(String(50), nullable=True)

    # Location & expat-specific
    country = Column(String(100), nullable=False)
    city = Column(String(100), nullable=True)
    relocation_support = Column(Boolean, nullable=False, default=False)
    visa_sponsorship = Column(Boolean, nullable=False, default=False)
    housing_support = Column(Boolean, nullable=False, default=False)

    # Description
    short_description = Column(String(255), nullable=False)
    full_description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=True)  # JSON string list
    required_languages = Column(Text, nullable=True)  # JSON string list

    # Salary & timeline
    salary_min = Column(Float, nullable=True)
    salary_max = Column(Float, nullable=True)
    currency = Column(String(5), nullable=True)
    application_deadline = Column(DateTime(timezone=True), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    positions_available = Column(Integer, nullable=False, default=1)

    tags = Column(Text, nullable=True)  # JSON string list
    is_visible = Column(Boolean, nullable=False, default=True)
    is_expired = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    created_by = relationship("User", back_populates="jobs")
    # Deleting a job removes its applications (ORM cascade + ON DELETE CASCADE).
    applications = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
