import enum

from sqlalchemy import JSON, Column, String, Text, Integer, DateTime, Enum, ForeignKey, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobforge.database import Base


class JobPostStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    EXPIRE = "EXPIRE"


class JobPost(Base):
    """A paid job listing. Visible to job seekers only while ACTIVE."""

    __tablename__ = "job_posts"

    id = Column(String, primary_key=True, index=True)
    company_id = Column(String, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    job_title = Column(String, nullable=False)
    employment_type = Column(String, nullable=False)
    location = Column(String, nullable=False)
    salary_from = Column(Integer, nullable=False)
    salary_to = Column(Integer, nullable=False)
    # Serialized rich-text document (JSON string), rendered by the front end
    job_description = Column(Text, nullable=False)
    listing_duration = Column(Integer, nullable=False)
    benefits = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)
    status = Column(
        Enum(JobPostStatus, name="job_post_status", native_enum=False, length=16),
        nullable=False,
        default=JobPostStatus.DRAFT,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    company = relationship("Company", back_populates="job_posts")
    saved_by = relationship(
        "SavedJobPost",
        back_populates="job_post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_job_posts_status_created_at", "status", "created_at"),
    )
