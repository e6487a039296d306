import enum

from sqlalchemy import Column, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobforge.database import Base


class UserType(str, enum.Enum):
    COMPANY = "COMPANY"
    JOB_SEEKER = "JOB_SEEKER"


class User(Base):
    """Identity record, created on first sign-in through the identity provider."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String)
    onboarding_completed = Column(Boolean, default=False, nullable=False)
    user_type = Column(Enum(UserType, name="user_type", native_enum=False, length=16), nullable=True)
    stripe_customer_id = Column(String, unique=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    company = relationship("Company", back_populates="user", uselist=False)
    job_seeker = relationship("JobSeeker", back_populates="user", uselist=False)
    saved_job_posts = relationship("SavedJobPost", back_populates="user")
