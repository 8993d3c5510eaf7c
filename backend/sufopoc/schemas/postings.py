from datetime import datetime

from pydantic import Field, field_validator, model_validator

from .common import ApiModel, blank_to_none

_JOB_OPTIONAL_TEXT = (
    "seniority_level",
    "employment_type",
    "city",
    "currency",
    "salary_min",
    "salary_max",
    "application_deadline",
    "start_date",
)


class JobCreate(ApiModel):
    # Basic job info
    title: str = Field(min_length=1, max_length=150)
    company_name: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=50)
    job_type: str = Field(min_length=1, max_length=50)
    seniority_level: str | None = Field(default=None, max_length=50)
    employment_type: str | None = Field(default=None, max_length=50)

    # Location & expat-specific
    country: str = Field(min_length=1, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    relocation_support: bool = False
    visa_sponsorship: bool = False
    housing_support: bool = False

    # Description
    short_description: str = Field(min_length=1, max_length=255)
    full_description: str = Field(min_length=1)
    requirements: list[str] = Field(default_factory=list)
    required_languages: list[str] = Field(default_factory=list)

    # Salary & timeline
    salary_min: float | None = Field(default=None, ge=0)
    salary_max: float | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, max_length=5)
    application_deadline: datetime | None = None
    start_date: datetime | None = None
    positions_available: int = Field(default=1, ge=1)

    is_visible: bool = True
    tags: list[str] = Field(default_factory=list)

    @field_validator(*_JOB_OPTIONAL_TEXT, mode="before")
    @classmethod
    def _blank(cls, v):  # noqa: ANN001, ANN206
        return blank_to_none(v)

    @model_validator(mode="after")
    def _salary_range(self):  # noqa: ANN202
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salaryMin must not exceed salaryMax")
        return self


class JobUpdate(ApiModel):
    title: str | None = Field(default=None, min_length=1, max_length=150)
    company_name: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = Field(default=None, min_length=1, max_length=50)
    job_type: str | None = Field(default=None, min_length=1, max_length=50)
    seniority_level: str | None = Field(default=None, max_length=50)
    employment_type: str | None = Field(default=None, max_length=50)

    country: str | None = Field(default=None, min_length=1, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    relocation_support: bool | None = None
    visa_sponsorship: bool | None = None
    housing_support: bool | None = None

    short_description: str | None = Field(default=None, min_length=1, max_length=255)
    full_description: str | None = Field(default=None, min_length=1)
    requirements: list[str] | None = None
    required_languages: list[str] | None = None

    salary_min: float | None = Field(default=None, ge=0)
    salary_max: float | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, max_length=5)
    application_deadline: datetime | None = None
    start_date: datetime | None = None
    positions_available: int | None = Field(default=None, ge=1)

    is_visible: bool | None = None
    is_expired: bool | None = None
    tags: list[str] | None = None

    @field_validator(*_JOB_OPTIONAL_TEXT, mode="before")
    @classmethod
    def _blank(cls, v):  # noqa: ANN001, ANN206
        return blank_to_none(v)


class OpleidingCreate(ApiModel):
    title: str = Field(min_length=1, max_length=150)
    description: str = Field(min_length=1)
    requirements: str = Field(min_length=1)
    location: str | None = Field(default=None, max_length=150)
    duration: str | None = Field(default=None, max_length=100)
    category: str = Field(min_length=1, max_length=50)
    is_visible: bool = True

    @field_validator("location", "duration", mode="before")
    @classmethod
    def _blank(cls, v):  # noqa: ANN001, ANN206
        return blank_to_none(v)


class OpleidingUpdate(ApiModel):
    title: str | None = Field(default=None, min_length=1, max_length=150)
    description: str | None = Field(default=None, min_length=1)
    requirements: str | None = Field(default=None, min_length=1)
    location: str | None = Field(default=None, max_length=150)
    duration: str | None = Field(default=None, max_length=100)
    category: str | None = Field(default=None, min_length=1, max_length=50)
    is_visible: bool | None = None
    is_expired: bool | None = None

    @field_validator("location", "duration", mode="before")
    @classmethod
    def _blank(cls, v):  # noqa: ANN001, ANN206
        return blank_to_none(v)
