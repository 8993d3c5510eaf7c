from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.application import Application, ApplicationStatus
from ..models.job import Job
from ..models.opleiding import Opleiding
from ..models.user import Role, User
from ..utils.validation import validate_application_status, validate_role


def list_users(db: Session, *, role: str | None = None) -> list[User]:
    q = db.query(User)
    if role:
        q = q.filter(User.role == validate_role(role).value)
    return q.order_by(User.created_at.desc(), User.id.desc()).all()


def list_businesses(db: Session, *, verified: bool | None = None) -> list[User]:
    q = db.query(User).filter(User.role == Role.BUSINESS.value)
    if verified is True:
        q = q.filter(User.is_business_verified.is_(True))
    elif verified is False:
        q = q.filter(User.is_business_verified.isnot(True))
    return q.order_by(User.created_at.desc(), User.id.desc()).all()


def list_pending_ambassadors(db: Session) -> list[User]:
    return (
        db.query(User)
        .filter(User.role == Role.AMBASSADOR.value, User.is_verified.is_(False))
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )


def list_applications(
    db: Session,
    *,
    status: str | None = None,
    job_id: int | None = None,
    opleiding_id: int | None = None,
) -> list[Application]:
    q = db.query(Application)
    if status:
        q = q.filter(Application.status == validate_application_status(status).value)
    if job_id is not None:
        q = q.filter(Application.job_id == job_id)
    if opleiding_id is not None:
        q = q.filter(Application.opleiding_id == opleiding_id)
    return q.order_by(Application.created_at.desc(), Application.id.desc()).all()


def stats(db: Session) -> dict:
    users_by_role = dict(db.query(User.role, func.count(User.id)).group_by(User.role).all())
    apps_by_status = dict(db.query(Application.status, func.count(Application.id)).group_by(Application.status).all())
    return {
        "users": {
            "total": sum(users_by_role.values()),
            "byRole": {r.value: int(users_by_role.get(r.value, 0)) for r in Role},
        },
        "pendingAmbassadors": db.query(User)
        .filter(User.role == Role.AMBASSADOR.value, User.is_verified.is_(False))
        .count(),
        "pendingBusinesses": db.query(User)
        .filter(User.role == Role.BUSINESS.value, User.is_business_verified.isnot(True))
        .count(),
        "jobs": {
            "total": db.query(Job).count(),
            "open": db.query(Job).filter(Job.is_visible.is_(True), Job.is_expired.is_(False)).count(),
        },
        "opleidingen": {
            "total": db.query(Opleiding).count(),
            "open": db.query(Opleiding).filter(Opleiding.is_expired.is_(False)).count(),
        },
        "applications": {
            "total": sum(apps_by_status.values()),
            "byStatus": {s.value: int(apps_by_status.get(s.value, 0)) for s in ApplicationStatus},
        },
    }
