from pydantic import Field, field_validator

from ..models.application import ApplicationStatus
from .common import ApiModel, DbId, UrlStr, blank_to_none


class ApplicationCreate(ApiModel):
    job_id: DbId | None = None
    opleiding_id: DbId | None = None
    user_id: DbId
    cover_letter: str = Field(min_length=1)
    cv_url: UrlStr | None = None

    @field_validator("job_id", "opleiding_id", "cv_url", mode="before")
    @classmethod
    def _blank(cls, v):  # noqa: ANN001, ANN206
        return blank_to_none(v)


class ApplicationStatusUpdate(ApiModel):
    status: ApplicationStatus
