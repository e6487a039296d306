from sqlalchemy.orm import Session

from jobforge.models.company import Company
from jobforge.models.user import User


def get_by_user_id(db: Session, user_id: str) -> Company | None:
    return db.query(Company).filter(Company.user_id == user_id).first()


def get_by_stripe_customer(db: Session, customer_id: str) -> Company | None:
    """Company owned by the user linked to a payment customer."""
    if not customer_id:
        return None
    return (
        db.query(Company)
        .join(User, Company.user_id == User.id)
        .filter(User.stripe_customer_id == customer_id)
        .first()
    )
