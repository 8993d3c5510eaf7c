"""
Ambassador and business verification.

Ambassador states are derived from the user row:

    UNVERIFIED   role AMBASSADOR, is_verified false, no pending code
    CODE_ISSUED  role AMBASSADOR, is_verified false, code + expiry set
    VERIFIED     role AMBASSADOR, is_verified true (terminal)
    DECLINED     role reverted to STUDENT (terminal)

Business verification is a single admin-controlled flag.
"""
import enum
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from .. import config
from ..models.user import Role, User
from ..utils.error_handlers import (
    ConflictError,
    NotFoundError,
    ValidationError,
    get_error_message,
)
from ..utils.security import codes_match, generate_verification_code
from ..utils.validation import ensure_utc
from . import notifications
from .accounts import commit_or_raise, get_user_or_404
from .notifications import Notification

logger = logging.getLogger(__name__)


class AmbassadorAction(str, enum.Enum):
    VERIFY = "verify"
    DECLINE = "decline"

    @classmethod
    def parse(cls, value: str | None) -> "AmbassadorAction":
        # "verify" is the implicit default when no action is posted.
        raw = (value or "").strip().lower() or cls.VERIFY.value
        try:
            return cls(raw)
        except ValueError:
            raise ValidationError("Invalid action. Must be one of: verify, decline") from None


class AmbassadorState(str, enum.Enum):
    UNVERIFIED = "UNVERIFIED"
    CODE_ISSUED = "CODE_ISSUED"
    VERIFIED = "VERIFIED"
    DECLINED = "DECLINED"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ambassador_state(user: User) -> AmbassadorState | None:
    """None for accounts that never were ambassadors (or are business/admin)."""
    role = Role.parse(user.role)
    if role is not Role.AMBASSADOR:
        return None
    if user.is_verified:
        return AmbassadorState.VERIFIED
    if user.verification_code:
        return AmbassadorState.CODE_ISSUED
    return AmbassadorState.UNVERIFIED


def _pending_ambassador(user: User) -> AmbassadorState:
    state = ambassador_state(user)
    if state is None:
        raise ValidationError(get_error_message("not_an_ambassador"))
    if state is AmbassadorState.VERIFIED:
        raise ConflictError(get_error_message("ambassador_already_verified"))
    return state


def issue_ambassador_code(db: Session, user_id: int, *, now: datetime | None = None) -> tuple[User, list[Notification]]:
    """Admin "verify": (re)issue a six-digit code valid for VERIFICATION_CODE_TTL_HOURS."""
    user = get_user_or_404(db, user_id)
    _pending_ambassador(user)

    code = generate_verification_code()
    user.verification_code = code
    user.verification_code_expires = (now or utcnow()) + timedelta(hours=config.VERIFICATION_CODE_TTL_HOURS)
    commit_or_raise(db, "issuing verification code")

    logger.info("Verification code issued for ambassador %s", user.id)
    return user, [notifications.ambassador_code(user, code)]


def decline_ambassador(db: Session, user_id: int) -> tuple[User, list[Notification]]:
    """Admin "decline": back to STUDENT, any pending code is discarded."""
    user = get_user_or_404(db, user_id)
    _pending_ambassador(user)

    user.role = Role.STUDENT.value
    user.is_verified = False
    user.verification_code = None
    user.verification_code_expires = None
    commit_or_raise(db, "declining ambassador")

    logger.info("Ambassador application declined for user %s", user.id)
    return user, [notifications.ambassador_declined(user)]


def confirm_ambassador_code(db: Session, *, email: str, code: str, now: datetime | None = None) -> User:
    """
    User submits the emailed code.

    Checks run in a fixed order and any failure leaves the row untouched. On
    success the code is cleared so it cannot be replayed.
    """
    email = (email or "").strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotFoundError(get_error_message("user_not_found"))

    if not user.verification_code or not user.verification_code_expires:
        raise ValidationError(get_error_message("no_verification_pending"))

    if not codes_match(code, user.verification_code):
        raise ValidationError(get_error_message("invalid_verification_code"))

    if (now or utcnow()) >= ensure_utc(user.verification_code_expires):
        raise ValidationError(get_error_message("verification_code_expired"))

    user.is_verified = True
    user.verification_code = None
    user.verification_code_expires = None
    commit_or_raise(db, "confirming verification code")

    logger.info("User %s completed ambassador verification", user.id)
    return user


def set_business_verification(db: Session, user_id: int, verified: bool) -> tuple[User, list[Notification]]:
    """Approval emails the business; revoking is silent."""
    user = get_user_or_404(db, user_id)
    if Role.parse(user.role) is not Role.BUSINESS:
        raise ValidationError(get_error_message("not_a_business"))

    user.is_business_verified = bool(verified)
    commit_or_raise(db, "updating business verification")

    logger.info("Business %s verification set to %s", user.id, user.is_business_verified)
    notes = [notifications.business_approved(user)] if verified else []
    return user, notes
