from pydantic import Field, field_validator

from ..utils.validation import EMAIL_PATTERN
from .common import ApiModel, blank_to_none


class ContactRequest(ApiModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    subject: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1, max_length=5000)


class BugReportRequest(ApiModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=5000)
    steps: str | None = Field(default=None, max_length=5000)
    email: str | None = Field(default=None, pattern=EMAIL_PATTERN, max_length=255)

    @field_validator("steps", "email", mode="before")
    @classmethod
    def _blank(cls, v):  # noqa: ANN001, ANN206
        return blank_to_none(v)
