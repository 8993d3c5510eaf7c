from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.common import PathId
from ..services import accounts
from ..utils.dependencies import RequestContext, get_request_context

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/{user_id:int}/cv")
def get_cv(
    user_id: PathId,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    # Users can only read their own CV URL
    return {"cvUrl": accounts.get_own_cv_url(db, ctx, user_id)}
