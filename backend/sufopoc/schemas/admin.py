from pydantic import StrictBool

from .common import ApiModel, DbId


class VerifyBusinessRequest(ApiModel):
    user_id: DbId
    verified: StrictBool
