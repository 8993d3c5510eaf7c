from pydantic import ConfigDict, Field, field_validator

from .common import ApiModel, UrlStr, blank_to_none


class SignupRequest(ApiModel):
    name: str = Field(min_length=1, max_length=255)
    email: str
    password: str
    role: str  # STUDENT / EXPERT / AMBASSADOR / BUSINESS
    # Business accounts only
    company_name: str | None = Field(default=None, max_length=255)
    company_website: UrlStr | None = None

    @field_validator("company_name", "company_website", mode="before")
    @classmethod
    def _blank(cls, v):  # noqa: ANN001, ANN206
        return blank_to_none(v)


class LoginRequest(ApiModel):
    email: str
    password: str
    role: str | None = None  # optional role gate (frontend-selected account type)


class VerifyOtpRequest(ApiModel):
    # The code is compared verbatim against the stored one.
    model_config = ConfigDict(str_strip_whitespace=False)

    email: str
    code: str = Field(min_length=6, max_length=6)
