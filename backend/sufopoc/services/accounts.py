import json
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.user import Role, User
from ..schemas.auth import SignupRequest
from ..schemas.onboarding import (
    AmbassadorOnboarding,
    BusinessOnboarding,
    ExpertOnboarding,
    StudentOnboarding,
)
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
from ..utils.roles import SIGNUP_ROLES
from ..utils.security import hash_password, verify_password
from ..utils.validation import validate_email, validate_password, validate_role
from . import notifications
from .notifications import Notification

logger = logging.getLogger(__name__)


def commit_or_raise(db: Session, operation: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, operation) from e


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == int(user_id)).first()
    if not user:
        raise NotFoundError(get_error_message("user_not_found"))
    return user


def register_user(db: Session, payload: SignupRequest) -> tuple[User, list[Notification]]:
    email = validate_email(payload.email)
    validate_password(payload.password)
    role = validate_role(payload.role, SIGNUP_ROLES)

    if db.query(User).filter(User.email == email).first():
        raise DuplicateError(get_error_message("email_exists"))

    try:
        hashed = hash_password(payload.password)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    is_business = role is Role.BUSINESS
    user = User(
        name=payload.name,
        email=email,
        password=hashed,
        role=role.value,
        is_verified=False,
        is_business_verified=False if is_business else None,
        company_name=payload.company_name if is_business else None,
        company_website=payload.company_website if is_business else None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email.
        db.rollback()
        raise DuplicateError(get_error_message("email_exists")) from None
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "creating user") from e
    db.refresh(user)

    logger.info("User signed up: id=%s role=%s", user.id, user.role)
    return user, [notifications.welcome(user), notifications.admin_new_signup(user)]


def authenticate(db: Session, *, email: str, password: str, role: str | None = None) -> User:
    email = validate_email(email)
    if not password:
        raise ValidationError("Password is required")

    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password):
        raise UnauthorizedError(get_error_message("invalid_credentials"))

    if role and Role.parse(role) is not Role.parse(user.role):
        raise ForbiddenError("Role mismatch. Please select the correct account type.")

    return user


def _dump_json(value) -> str | None:  # noqa: ANN001
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)


def complete_student_onboarding(db: Session, ctx: RequestContext, payload: StudentOnboarding) -> User:
    user = get_user_or_404(db, ctx.user_id)
    if payload.cv_url is not None:
        user.cv_url = payload.cv_url
    user.skills = _dump_json(payload.skills)
    user.education = _dump_json(payload.education.model_dump())
    user.experience = _dump_json(payload.experience.model_dump())
    user.interests = _dump_json(payload.interests)
    commit_or_raise(db, "student onboarding")
    return user


def complete_expert_onboarding(db: Session, ctx: RequestContext, payload: ExpertOnboarding) -> User:
    user = get_user_or_404(db, ctx.user_id)
    user.expertise = _dump_json(payload.expertise)
    user.portfolio_links = _dump_json(payload.portfolio_links)
    user.years_of_experience = payload.years_of_experience
    user.job_preferences = _dump_json(payload.job_preferences.model_dump(by_alias=True))
    commit_or_raise(db, "expert onboarding")
    return user


def complete_business_onboarding(db: Session, ctx: RequestContext, payload: BusinessOnboarding) -> User:
    if ctx.role is not Role.BUSINESS:
        raise ForbiddenError(get_error_message("forbidden"))

    user = get_user_or_404(db, ctx.user_id)
    data = payload.model_dump(exclude_unset=True)
    for field in ("bio", "industry", "employee_count"):
        if field in data:
            setattr(user, field, data[field])
    for field in ("company_website", "company_logo"):
        if field in data:
            setattr(user, field, data[field])
    commit_or_raise(db, "business onboarding")
    return user


def apply_as_ambassador(
    db: Session, ctx: RequestContext, payload: AmbassadorOnboarding
) -> tuple[User, list[Notification]]:
    """
    STUDENT -> AMBASSADOR application.

    The new ambassador starts unverified and waits for an admin decision. An
    existing ambassador only updates the profile text; its verification state
    is left alone.
    """
    if ctx.role not in (Role.STUDENT, Role.AMBASSADOR):
        raise ForbiddenError(get_error_message("forbidden"))

    user = get_user_or_404(db, ctx.user_id)
    user.bio = payload.bio
    user.region = payload.region

    notes: list[Notification] = []
    if Role.parse(user.role) is Role.STUDENT:
        user.role = Role.AMBASSADOR.value
        user.is_verified = False
        notes.append(notifications.admin_ambassador_application(user))

    commit_or_raise(db, "ambassador onboarding")
    if notes:
        logger.info("User %s applied to become an ambassador", user.id)
    return user, notes


def get_own_cv_url(db: Session, ctx: RequestContext, user_id: int) -> str | None:
    if ctx.user_id != int(user_id):
        raise ForbiddenError(get_error_message("forbidden"))
    return get_user_or_404(db, user_id).cv_url


