from fastapi import APIRouter, Depends

from ..utils.dependencies import RequestContext
from ..utils.roles import business_only

router = APIRouter(prefix="/api/business", tags=["Business"])


@router.get("/verification")
def verification_status(ctx: RequestContext = Depends(business_only)):
    return {"verified": bool(ctx.is_business_verified)}
