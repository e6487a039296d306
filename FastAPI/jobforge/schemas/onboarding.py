from pydantic import BaseModel, Field, HttpUrl, field_validator


class CompanyForm(BaseModel):
    name: str = Field(min_length=2)
    location: str = Field(min_length=1)
    about: str = Field(min_length=10)
    logo: str = Field(min_length=1)
    website: HttpUrl
    x_account: str | None = None

    @field_validator("x_account")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    def to_record(self) -> dict:
        data = self.model_dump()
        data["website"] = str(self.website)
        return data


class JobSeekerForm(BaseModel):
    name: str = Field(min_length=2)
    about: str = Field(min_length=10)
    resume: str = Field(min_length=1)

    def to_record(self) -> dict:
        return self.model_dump()


class OnboardingState(BaseModel):
    onboarding_completed: bool
    user_type: str | None = None
    profile: str
