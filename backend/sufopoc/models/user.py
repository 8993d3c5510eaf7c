import enum

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Role(str, enum.Enum):
    STUDENT = "STUDENT"
    EXPERT = "EXPERT"
    AMBASSADOR = "AMBASSADOR"
    BUSINESS = "BUSINESS"
    ADMIN = "ADMIN"

    @classmethod
    def parse(cls, value) -> "Role | None":  # noqa: ANN001
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().upper())
        except ValueError:
            return None


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        # A pending one-time code always carries its expiry (and vice versa).
        CheckConstraint(
            "(verification_code IS NULL AND verification_code_expires IS NULL) "
            "OR (verification_code IS NOT NULL AND verification_code_expires IS NOT NULL)",
            name="ck_users_verification_code_pair",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # store hashed password
    role = Column(String(20), nullable=False)  # STUDENT / EXPERT / AMBASSADOR / BUSINESS / ADMIN

    # Ambassador email verification (admin issues a code, user confirms it)
    is_verified = Column(Boolean, nullable=False, default=False)
    verification_code = Column(String(6), nullable=True)
    verification_code_expires = Column(DateTime(timezone=True), nullable=True)
    # Business approval by an admin; NULL for every non-business account
    is_business_verified = Column(Boolean, nullable=True)

    # Profile (student / expert onboarding)
    cv_url = Column(String(500), nullable=True)
    skills = Column(Text, nullable=True)  # JSON string list
    education = Column(Text, nullable=True)  # JSON object
    experience = Column(Text, nullable=True)  # JSON object
    interests = Column(Text, nullable=True)  # JSON string list
    expertise = Column(Text, nullable=True)  # JSON string list
    portfolio_links = Column(Text, nullable=True)  # JSON string list
    years_of_experience = Column(Integer, nullable=True)
    job_preferences = Column(Text, nullable=True)  # JSON object

    # Ambassador / business profile
    bio = Column(Text, nullable=True)
    region = Column(String(120), nullable=True)
    company_name = Column(String(255), nullable=True)
    company_website = Column(String(500), nullable=True)
    company_logo = Column(String(500), nullable=True)
    industry = Column(String(120), nullable=True)
    employee_count = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    jobs = relationship("Job", back_populates="created_by")
    opleidingen = relationship("Opleiding", back_populates="created_by")
    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan")
