import enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class ApplicationStatus(str, enum.Enum):
    SUBMITTED = "SUBMITTED"
    VIEWED = "VIEWED"
    INTERVIEW = "INTERVIEW"
    REQUEST_INFO = "REQUEST_INFO"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        # One application per (user, posting); the real guard against double submits.
        UniqueConstraint("user_id", "job_id", name="uq_applications_user_job"),
        UniqueConstraint("user_id", "opleiding_id", name="uq_applications_user_opleiding"),
        CheckConstraint(
            "(job_id IS NOT NULL AND opleiding_id IS NULL) "
            "OR (job_id IS NULL AND opleiding_id IS NOT NULL)",
            name="ck_applications_single_target",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=True, index=True)
    opleiding_id = Column(Integer, ForeignKey("opleidingen.id", ondelete="CASCADE"), nullable=True, index=True)
    cv_url = Column(String(500), nullable=True)
    cover_letter = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=ApplicationStatus.SUBMITTED.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")
    opleiding = relationship("Opleiding", back_populates="applications")

    @property
    def posting(self):
        return self.job if self.job_id is not None else self.opleiding
