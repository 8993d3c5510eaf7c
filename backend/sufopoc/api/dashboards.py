"""
Role dashboards.

The route guard middleware screens these paths on the token's role claim
before the handler runs. The claim can be stale (an ambassador declined after
login still carries AMBASSADOR), so each dashboard re-checks the role stored in
the database and sends the caller back to the landing page on a mismatch.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.application import Application
from ..models.job import Job
from ..models.opleiding import Opleiding
from ..models.user import User
from ..services import admin as admin_service
from ..services import postings
from ..services.applications import list_own_applications
from ..services.payloads import application_to_public, job_to_public, opleiding_to_public, user_to_public
from ..services.verification import ambassador_state
from ..utils.dependencies import RequestContext, get_request_context
from ..utils.roles import role_allowed_for_path
from ..utils.route_guard import LANDING_PATH

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Dashboards"])

LATEST_LIMIT = 6


def _posting_summary(db: Session, ctx: RequestContext) -> dict:
    jobs, opleidingen = postings.list_created_by(db, ctx.user_id)
    return {
        "jobs": [
            {**job_to_public(j), "applicationCount": db.query(Application).filter(Application.job_id == j.id).count()}
            for j in jobs
        ],
        "opleidingen": [
            {
                **opleiding_to_public(o),
                "applicationCount": db.query(Application).filter(Application.opleiding_id == o.id).count(),
            }
            for o in opleidingen
        ],
    }


def _applicant_dashboard(db: Session, ctx: RequestContext) -> dict:
    applied = list_own_applications(db, ctx)
    return {
        "user": ctx.as_dict(),
        "applications": [application_to_public(a, include_posting=True) for a in applied],
        "latestJobs": [job_to_public(j) for j in postings.list_public_jobs(db)[:LATEST_LIMIT]],
    }


@router.get("/")
def landing(db: Session = Depends(get_db)):
    return {
        "openJobs": db.query(Job).filter(Job.is_visible.is_(True), Job.is_expired.is_(False)).count(),
        "openOpleidingen": db.query(Opleiding).filter(Opleiding.is_expired.is_(False)).count(),
        "latestJobs": [job_to_public(j) for j in postings.list_public_jobs(db)[:LATEST_LIMIT]],
        "latestOpleidingen": [opleiding_to_public(o) for o in postings.list_public_opleidingen(db)[:LATEST_LIMIT]],
    }


def dashboard_context(request: Request, ctx: RequestContext = Depends(get_request_context)) -> RequestContext | None:
    """The caller's context, or None when their current role may not see this dashboard."""
    if not role_allowed_for_path(ctx.role, request.url.path):
        logger.info("Dashboard redirect: path=%s user=%s role=%s", request.url.path, ctx.user_id, ctx.role.value)
        return None
    return ctx


def _to_landing() -> RedirectResponse:
    return RedirectResponse(url=LANDING_PATH, status_code=307)


@router.get("/admin")
def admin_dashboard(db: Session = Depends(get_db), ctx: RequestContext | None = Depends(dashboard_context)):
    if ctx is None:
        return _to_landing()
    return {
        "user": ctx.as_dict(),
        "stats": admin_service.stats(db),
        "pendingAmbassadors": [user_to_public(u) for u in admin_service.list_pending_ambassadors(db)],
        "pendingBusinesses": [user_to_public(u) for u in admin_service.list_businesses(db, verified=False)],
    }


@router.get("/ambassador")
def ambassador_dashboard(db: Session = Depends(get_db), ctx: RequestContext | None = Depends(dashboard_context)):
    if ctx is None:
        return _to_landing()
    user = db.get(User, ctx.user_id)
    state = ambassador_state(user) if user else None
    return {
        "user": ctx.as_dict(),
        "verificationState": state.value if state else None,
        **_posting_summary(db, ctx),
    }


@router.get("/business")
def business_dashboard(db: Session = Depends(get_db), ctx: RequestContext | None = Depends(dashboard_context)):
    if ctx is None:
        return _to_landing()
    return {
        "user": ctx.as_dict(),
        "verified": bool(ctx.is_business_verified),
        **_posting_summary(db, ctx),
    }


@router.get("/student")
def student_dashboard(db: Session = Depends(get_db), ctx: RequestContext | None = Depends(dashboard_context)):
    if ctx is None:
        return _to_landing()
    return _applicant_dashboard(db, ctx)


@router.get("/expert")
def expert_dashboard(db: Session = Depends(get_db), ctx: RequestContext | None = Depends(dashboard_context)):
    if ctx is None:
        return _to_landing()
    return _applicant_dashboard(db, ctx)
