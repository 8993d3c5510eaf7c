from pydantic import Field, field_validator

from .common import ApiModel, UrlStr, blank_to_none


class Education(ApiModel):
    degree: str
    institution: str
    year: str


class Experience(ApiModel):
    company: str
    position: str
    duration: str
    description: str


class JobPreferences(ApiModel):
    remote: bool
    location: str
    salary_min: str


class StudentOnboarding(ApiModel):
    cv_url: UrlStr | None = None
    skills: list[str]
    education: Education
    experience: Experience
    interests: list[str]

    @field_validator("cv_url", mode="before")
    @classmethod
    def _blank(cls, v):  # noqa: ANN001, ANN206
        return blank_to_none(v)


class ExpertOnboarding(ApiModel):
    expertise: list[str]
    portfolio_links: list[UrlStr]
    years_of_experience: int = Field(ge=0, le=80)
    job_preferences: JobPreferences


class BusinessOnboarding(ApiModel):
    bio: str | None = None
    industry: str | None = Field(default=None, max_length=120)
    employee_count: int | None = Field(default=None, ge=0)
    company_website: UrlStr | None = None
    company_logo: UrlStr | None = None

    @field_validator("company_website", "company_logo", mode="before")
    @classmethod
    def _blank(cls, v):  # noqa: ANN001, ANN206
        return blank_to_none(v)


class AmbassadorOnboarding(ApiModel):
    bio: str
    region: str = Field(max_length=120)
