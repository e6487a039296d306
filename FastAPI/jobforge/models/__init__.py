from jobforge.models.user import User, UserType
from jobforge.models.company import Company
from jobforge.models.job_seeker import JobSeeker
from jobforge.models.job_post import JobPost, JobPostStatus
from jobforge.models.saved_job_post import SavedJobPost

__all__ = [
    "User",
    "UserType",
    "Company",
    "JobSeeker",
    "JobPost",
    "JobPostStatus",
    "SavedJobPost",
]
