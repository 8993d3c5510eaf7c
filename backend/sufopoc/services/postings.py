"""
Jobs and opleidingen.

Both posting kinds share one rule set: only verified creators may publish,
only the creator or an admin may change or delete, and the public listing
hides expired postings.
"""
import json
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..models.application import Application
from ..models.job import Job
from ..models.opleiding import Opleiding
from ..models.user import Role
from ..schemas.postings import JobCreate, JobUpdate, OpleidingCreate, OpleidingUpdate
from ..utils.dependencies import RequestContext
from ..utils.error_handlers import ForbiddenError, NotFoundError, ValidationError, get_error_message
from ..utils.roles import POSTING_CREATOR_ROLES
from ..utils.validation import clean_string_list, ensure_utc
from .accounts import commit_or_raise

logger = logging.getLogger(__name__)

Posting = Job | Opleiding

_JOB_LIST_FIELDS = ("requirements", "required_languages", "tags")
_DATETIME_FIELDS = ("application_deadline", "start_date")


def ensure_can_create_posting(ctx: RequestContext) -> None:
    """Creator gate, evaluated against the caller's current flags."""
    if ctx.role not in POSTING_CREATOR_ROLES:
        raise ForbiddenError(get_error_message("forbidden"))
    if ctx.role is Role.AMBASSADOR and not ctx.is_verified:
        raise ForbiddenError(get_error_message("ambassador_not_verified"))
    if ctx.role is Role.BUSINESS and not ctx.is_business_verified:
        raise ForbiddenError(get_error_message("business_not_verified"))


def can_manage(ctx: RequestContext, posting: Posting) -> bool:
    return ctx.is_admin or posting.created_by_id == ctx.user_id


def ensure_can_manage(ctx: RequestContext, posting: Posting) -> None:
    if not can_manage(ctx, posting):
        raise ForbiddenError(get_error_message("forbidden"))


def _apply_fields(posting: Posting, data: dict, list_fields: tuple[str, ...] = ()) -> None:
    columns = posting.__table__.columns
    for field, value in data.items():
        if value is None and not columns[field].nullable:
            raise ValidationError(f"{field} cannot be null")
        if field in list_fields:
            value = json.dumps(clean_string_list(value), ensure_ascii=False) if value is not None else None
        elif field in _DATETIME_FIELDS:
            value = ensure_utc(value)
        setattr(posting, field, value)


# Jobs


def get_job_or_404(db: Session, job_id: int) -> Job:
    job = db.query(Job).filter(Job.id == int(job_id)).first()
    if not job:
        raise NotFoundError(get_error_message("job_not_found"))
    return job


def create_job(db: Session, ctx: RequestContext, payload: JobCreate) -> Job:
    ensure_can_create_posting(ctx)

    job = Job(created_by_id=ctx.user_id, is_expired=False)
    _apply_fields(job, payload.model_dump(), _JOB_LIST_FIELDS)
    db.add(job)
    commit_or_raise(db, "creating job")
    db.refresh(job)

    logger.info("Job %s created by user %s (%s)", job.id, ctx.user_id, ctx.role.value)
    return job


def list_public_jobs(
    db: Session,
    *,
    search: str | None = None,
    category: str | None = None,
    job_type: str | None = None,
    country: str | None = None,
    employment_type: str | None = None,
) -> list[Job]:
    q = db.query(Job).filter(Job.is_visible.is_(True), Job.is_expired.is_(False))

    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(
            or_(
                Job.title.ilike(term),
                Job.company_name.ilike(term),
                Job.short_description.ilike(term),
                Job.city.ilike(term),
                Job.country.ilike(term),
            )
        )
    if category:
        q = q.filter(Job.category == category)
    if job_type:
        q = q.filter(Job.job_type == job_type)
    if country:
        q = q.filter(Job.country == country)
    if employment_type:
        q = q.filter(Job.employment_type == employment_type)

    return q.order_by(Job.created_at.desc(), Job.id.desc()).all()


def update_job(db: Session, ctx: RequestContext, job_id: int, payload: JobUpdate) -> Job:
    job = get_job_or_404(db, job_id)
    ensure_can_manage(ctx, job)

    _apply_fields(job, payload.model_dump(exclude_unset=True), _JOB_LIST_FIELDS)
    commit_or_raise(db, "updating job")
    db.refresh(job)
    return job


def delete_job(db: Session, ctx: RequestContext, job_id: int) -> None:
    job = get_job_or_404(db, job_id)
    ensure_can_manage(ctx, job)

    db.delete(job)
    commit_or_raise(db, "deleting job")
    logger.info("Job %s deleted by user %s", job_id, ctx.user_id)


# Opleidingen


def get_opleiding_or_404(db: Session, opleiding_id: int) -> Opleiding:
    opleiding = db.query(Opleiding).filter(Opleiding.id == int(opleiding_id)).first()
    if not opleiding:
        raise NotFoundError(get_error_message("opleiding_not_found"))
    return opleiding


def create_opleiding(db: Session, ctx: RequestContext, payload: OpleidingCreate) -> Opleiding:
    ensure_can_create_posting(ctx)

    opleiding = Opleiding(created_by_id=ctx.user_id, is_expired=False)
    _apply_fields(opleiding, payload.model_dump())
    db.add(opleiding)
    commit_or_raise(db, "creating opleiding")
    db.refresh(opleiding)

    logger.info("Opleiding %s created by user %s (%s)", opleiding.id, ctx.user_id, ctx.role.value)
    return opleiding


def list_public_opleidingen(
    db: Session,
    *,
    search: str | None = None,
    category: str | None = None,
    location: str | None = None,
) -> list[Opleiding]:
    q = db.query(Opleiding).filter(Opleiding.is_expired.is_(False))

    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(or_(Opleiding.title.ilike(term), Opleiding.description.ilike(term)))
    if category:
        q = q.filter(Opleiding.category == category)
    if location:
        q = q.filter(Opleiding.location.ilike(f"%{location.strip()}%"))

    return q.order_by(Opleiding.created_at.desc(), Opleiding.id.desc()).all()


def update_opleiding(db: Session, ctx: RequestContext, opleiding_id: int, payload: OpleidingUpdate) -> Opleiding:
    opleiding = get_opleiding_or_404(db, opleiding_id)
    ensure_can_manage(ctx, opleiding)

    _apply_fields(opleiding, payload.model_dump(exclude_unset=True))
    commit_or_raise(db, "updating opleiding")
    db.refresh(opleiding)
    return opleiding


def delete_opleiding(db: Session, ctx: RequestContext, opleiding_id: int) -> None:
    opleiding = get_opleiding_or_404(db, opleiding_id)
    ensure_can_manage(ctx, opleiding)

    db.delete(opleiding)
    commit_or_raise(db, "deleting opleiding")
    logger.info("Opleiding %s deleted by user %s", opleiding_id, ctx.user_id)


# Applications per posting


def list_posting_applications(db: Session, ctx: RequestContext, posting: Posting) -> list[Application]:
    ensure_can_manage(ctx, posting)
    column = Application.job_id if isinstance(posting, Job) else Application.opleiding_id
    return (
        db.query(Application)
        .filter(column == posting.id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )


def list_created_by(db: Session, user_id: int) -> tuple[list[Job], list[Opleiding]]:
    jobs = db.query(Job).filter(Job.created_by_id == user_id).order_by(Job.created_at.desc(), Job.id.desc()).all()
    opleidingen = (
        db.query(Opleiding)
        .filter(Opleiding.created_by_id == user_id)
        .order_by(Opleiding.created_at.desc(), Opleiding.id.desc())
        .all()
    )
    return jobs, opleidingen
