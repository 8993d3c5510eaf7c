"""
Application lifecycle.

Submitting creates a SUBMITTED row and notifies the applicant and the admin
mailbox. Any status may be set from any status by the posting's creator or an
admin; every update notifies the applicant, even when the value is unchanged.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.application import Application, ApplicationStatus
from ..models.user import User
from ..schemas.applications import ApplicationCreate
from ..utils.dependencies import RequestContext
from ..utils.error_handlers import (
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    get_error_message,
    handle_database_error,
)
from ..utils.roles import APPLICANT_ROLES
from . import notifications
from .accounts import commit_or_raise, get_user_or_404
from .notifications import Notification
from .postings import can_manage, get_job_or_404, get_opleiding_or_404

logger = logging.getLogger(__name__)


def get_application_or_404(db: Session, application_id: int) -> Application:
    application = db.query(Application).filter(Application.id == int(application_id)).first()
    if not application:
        raise NotFoundError(get_error_message("application_not_found"))
    return application


def _existing_application(db: Session, *, user_id: int, job_id: int | None, opleiding_id: int | None) -> Application | None:
    q = db.query(Application).filter(Application.user_id == user_id)
    if job_id is not None:
        q = q.filter(Application.job_id == job_id)
    else:
        q = q.filter(Application.opleiding_id == opleiding_id)
    return q.first()


def submit_application(
    db: Session, ctx: RequestContext, payload: ApplicationCreate
) -> tuple[Application, list[Notification]]:
    if ctx.user_id != payload.user_id:
        raise UnauthorizedError(get_error_message("caller_mismatch"))
    if ctx.role not in APPLICANT_ROLES:
        raise ForbiddenError(get_error_message("forbidden"))

    if payload.job_id is None and payload.opleiding_id is None:
        raise ValidationError(get_error_message("missing_target"))
    if payload.job_id is not None and payload.opleiding_id is not None:
        raise ValidationError(get_error_message("multiple_targets"))

    if payload.job_id is not None:
        posting = get_job_or_404(db, payload.job_id)
        posting_kind = "Job"
    else:
        posting = get_opleiding_or_404(db, payload.opleiding_id)
        posting_kind = "Opleiding"

    if posting.is_expired:
        raise ValidationError(get_error_message("posting_closed"))

    # Fast path only; the unique constraints below are what actually hold.
    if _existing_application(db, user_id=ctx.user_id, job_id=payload.job_id, opleiding_id=payload.opleiding_id):
        raise DuplicateError(get_error_message("already_applied"))

    applicant = get_user_or_404(db, ctx.user_id)
    cv_url = payload.cv_url or applicant.cv_url or None

    application = Application(
        user_id=ctx.user_id,
        job_id=payload.job_id,
        opleiding_id=payload.opleiding_id,
        cv_url=cv_url,
        cover_letter=payload.cover_letter,
        status=ApplicationStatus.SUBMITTED.value,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Duplicate application rejected by constraint: user=%s", ctx.user_id)
        raise DuplicateError(get_error_message("already_applied")) from None
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "creating application") from e
    db.refresh(application)

    logger.info("Application %s submitted by user %s", application.id, ctx.user_id)
    return application, [
        notifications.application_received(applicant, posting.title),
        notifications.admin_new_application(applicant, posting.title, posting_kind),
    ]


def update_application_status(
    db: Session, ctx: RequestContext, application_id: int, status: ApplicationStatus
) -> tuple[Application, list[Notification]]:
    application = get_application_or_404(db, application_id)
    posting = application.posting
    if posting is None or not can_manage(ctx, posting):
        raise ForbiddenError(get_error_message("forbidden"))

    previous = application.status
    application.status = ApplicationStatus(status).value
    commit_or_raise(db, "updating application status")
    db.refresh(application)

    logger.info(
        "Application %s status %s -> %s by user %s",
        application.id, previous, application.status, ctx.user_id,
    )
    applicant: User = application.user
    return application, [notifications.application_status_changed(applicant, posting.title, application.status)]


def list_own_applications(db: Session, ctx: RequestContext) -> list[Application]:
    return (
        db.query(Application)
        .filter(Application.user_id == ctx.user_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )
