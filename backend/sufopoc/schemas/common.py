from typing import Annotated

from fastapi import Path
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..utils.validation import MAX_DB_ID


class ApiModel(BaseModel):
    """Request body base: camelCase on the wire, unknown fields rejected."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def blank_to_none(v):  # noqa: ANN001, ANN201
    if isinstance(v, str) and not v.strip():
        return None
    return v


_HTTP_URL = TypeAdapter(HttpUrl)


def _check_http_url(v: str) -> str:
    # Validated as a URL but stored exactly as submitted (HttpUrl would append "/").
    try:
        _HTTP_URL.validate_python(v)
    except PydanticValidationError:
        raise ValueError("Input should be a valid http(s) URL") from None
    return v


# Row ids, bounded so oversized numbers fail validation instead of overflowing the driver.
DbId = Annotated[int, Field(ge=1, le=MAX_DB_ID)]
PathId = Annotated[int, Path(ge=1, le=MAX_DB_ID)]

UrlStr = Annotated[str, Field(max_length=500), AfterValidator(_check_http_url)]
