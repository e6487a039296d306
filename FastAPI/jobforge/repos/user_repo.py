from sqlalchemy.orm import Session, joinedload

from jobforge.core.security import IdentityClaims, generate_id
from jobforge.models.company import Company
from jobforge.models.job_seeker import JobSeeker
from jobforge.models.user import User, UserType


def get_by_id(db: Session, user_id: str) -> User | None:
    return (
        db.query(User)
        .options(joinedload(User.company), joinedload(User.job_seeker))
        .filter(User.id == user_id)
        .first()
    )


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def create(db: Session, user_id: str, email: str, name: str | None = None) -> User:
    user = User(
        id=user_id,
        email=email,
        name=name,
        onboarding_completed=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_or_create_from_identity(db: Session, claims: IdentityClaims) -> tuple[User, bool]:
    """Return (user, created). Users are created the first time an identity signs in."""
    user = get_by_id(db, claims.subject)
    if user:
        return user, False
    return create(db, claims.subject, claims.email, claims.name), True


def set_stripe_customer_id(db: Session, user_id: str, customer_id: str) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    user.stripe_customer_id = customer_id
    db.commit()
    db.refresh(user)
    return user


def complete_company_onboarding(db: Session, user: User, data: dict) -> Company:
    company = Company(id=generate_id(), user_id=user.id, **data)
    user.onboarding_completed = True
    user.user_type = UserType.COMPANY
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


def complete_job_seeker_onboarding(db: Session, user: User, data: dict) -> JobSeeker:
    job_seeker = JobSeeker(id=generate_id(), user_id=user.id, **data)
    user.onboarding_completed = True
    user.user_type = UserType.JOB_SEEKER
    db.add(job_seeker)
    db.commit()
    db.refresh(job_seeker)
    return job_seeker
