from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Opleiding(Base):
    """Training / study-abroad programme, posted the same way as a Job."""

    __tablename__ = "opleidingen"

    id = Column(Integer, primary_key=True, index=True)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(150), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=False)
    location = Column(String(150), nullable=True)
    duration = Column(String(100), nullable=True)
    category = Column(String(50), nullable=False)
    is_visible = Column(Boolean, nullable=False, default=True)
    is_expired = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    created_by = relationship("User", back_populates="opleidingen")
    applications = relationship(
        "Application",
        back_populates="opleiding",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
