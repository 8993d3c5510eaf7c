import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Form, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.admin import VerifyBusinessRequest
from ..services import admin as admin_service
from ..services import notifications, verification
from ..services.payloads import application_to_public, user_to_public
from ..services.verification import AmbassadorAction
from ..utils.dependencies import RequestContext
from ..utils.error_handlers import ValidationError
from ..utils.roles import admin_only
from ..utils.validation import MAX_DB_ID, validate_integer_field

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.post("/verify-ambassador")
def verify_ambassador(
    background_tasks: BackgroundTasks,
    user_id: str | None = Form(default=None, alias="userId"),
    action: str | None = Form(default=None),
    db: Session = Depends(get_db),
    admin: RequestContext = Depends(admin_only),
):
    if not user_id or not user_id.strip():
        raise ValidationError("User ID required")
    target_id = validate_integer_field(user_id.strip(), "User ID", min_value=1, max_value=MAX_DB_ID)

    if AmbassadorAction.parse(action) is AmbassadorAction.DECLINE:
        _, notes = verification.decline_ambassador(db, target_id)
        message = "Ambassador application declined"
    else:
        _, notes = verification.issue_ambassador_code(db, target_id)
        message = "Verification code sent to user"

    notifications.queue(background_tasks, *notes)
    logger.info("Admin %s: %s (user %s)", admin.user_id, message, target_id)
    return {"message": message}


@router.post("/verify-business")
def verify_business(
    payload: VerifyBusinessRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    admin: RequestContext = Depends(admin_only),
):
    user, notes = verification.set_business_verification(db, payload.user_id, payload.verified)
    notifications.queue(background_tasks, *notes)
    return {
        "message": f"Business {'verified' if payload.verified else 'unverified'} successfully",
        "user": user_to_public(user),
    }


@router.get("/users")
def list_users(
    role: str | None = Query(default=None),
    db: Session = Depends(get_db),
    admin: RequestContext = Depends(admin_only),
):
    return {"success": True, "users": [user_to_public(u) for u in admin_service.list_users(db, role=role)]}


@router.get("/businesses")
def list_businesses(
    verified: bool | None = Query(default=None),
    db: Session = Depends(get_db),
    admin: RequestContext = Depends(admin_only),
):
    businesses = admin_service.list_businesses(db, verified=verified)
    return {"success": True, "businesses": [user_to_public(u) for u in businesses]}


@router.get("/applications")
def list_applications(
    status: str | None = Query(default=None),
    job_id: int | None = Query(default=None, alias="jobId", ge=1, le=MAX_DB_ID),
    opleiding_id: int | None = Query(default=None, alias="opleidingId", ge=1, le=MAX_DB_ID),
    db: Session = Depends(get_db),
    admin: RequestContext = Depends(admin_only),
):
    applications = admin_service.list_applications(db, status=status, job_id=job_id, opleiding_id=opleiding_id)
    return {
        "success": True,
        "applications": [application_to_public(a, include_user=True, include_posting=True) for a in applications],
    }


@router.get("/stats")
def stats(db: Session = Depends(get_db), admin: RequestContext = Depends(admin_only)):
    return {"success": True, "stats": admin_service.stats(db)}
