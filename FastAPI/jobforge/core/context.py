"""
Per-request identity context.

Handlers receive a RequestContext instead of looking the session up
themselves. The caller's profile is a tagged variant: exactly one of
CompanyProfile, JobSeekerProfile or Unset.
"""
import logging
from dataclasses import dataclass, field
from typing import Union

from jobforge.models.company import Company
from jobforge.models.job_seeker import JobSeeker
from jobforge.models.user import User, UserType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompanyProfile:
    company: Company
    kind: str = "company"


@dataclass(frozen=True)
class JobSeekerProfile:
    job_seeker: JobSeeker
    kind: str = "job_seeker"


@dataclass(frozen=True)
class Unset:
    kind: str = "unset"


Profile = Union[CompanyProfile, JobSeekerProfile, Unset]


class LoginRequired(Exception):
    """Raised when a route requires a signed-in user; mapped to a redirect to the login page."""


@dataclass
class RequestContext:
    user: User | None = None
    profile: Profile = field(default_factory=Unset)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> str | None:
        return self.user.id if self.user is not None else None

    @property
    def company(self) -> Company | None:
        if isinstance(self.profile, CompanyProfile):
            return self.profile.company
        return None


def resolve_profile(user: User) -> Profile:
    """Build the profile variant from the user's stored profiles."""
    company = getattr(user, "company", None)
    job_seeker = getattr(user, "job_seeker", None)
    if company is not None and job_seeker is not None:
        # Onboarding keeps these exclusive; older rows may not be.
        logger.warning("User %s holds both a company and a job seeker profile", user.id)
        if user.user_type == UserType.JOB_SEEKER:
            return JobSeekerProfile(job_seeker=job_seeker)
        return CompanyProfile(company=company)
    if company is not None:
        return CompanyProfile(company=company)
    if job_seeker is not None:
        return JobSeekerProfile(job_seeker=job_seeker)
    return Unset()
