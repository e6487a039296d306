from pydantic import BaseModel


class MeResponse(BaseModel):
    id: str
    email: str
    name: str | None = None
    onboarding_completed: bool = False
    user_type: str | None = None
    profile: str = "unset"
    has_payment_customer: bool = False
