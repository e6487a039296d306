from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobforge.database import Base


class SavedJobPost(Base):
    """A user's bookmark on a job post."""

    __tablename__ = "saved_job_posts"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_post_id = Column(String, ForeignKey("job_posts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="saved_job_posts")
    job_post = relationship("JobPost", back_populates="saved_by")

    __table_args__ = (
        UniqueConstraint("user_id", "job_post_id", name="uq_saved_job_posts_user_job"),
    )
