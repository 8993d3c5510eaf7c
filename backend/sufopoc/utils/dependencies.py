"""
Request-scoped authentication dependencies.

Every authenticated handler receives a ``RequestContext`` built once per
request from the session token (Bearer header or session cookie). Role and
verification flags are re-read from the users table so an admin decision takes
effect on the caller's very next request.
"""
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..config import SESSION_COOKIE_NAME
from ..database import get_db
from ..models.user import Role, User
from .error_handlers import UnauthorizedError, get_error_message
from .jwt import decode_access_token


@dataclass(frozen=True)
class RequestContext:
    user_id: int
    role: Role
    is_verified: bool
    is_business_verified: bool | None
    name: str | None = None
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def as_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "isVerified": self.is_verified,
            "isBusinessVerified": self.is_business_verified,
        }


def extract_session_token(request: Request) -> str | None:
    """Bearer header wins over the session cookie."""
    auth = request.headers.get("authorization") or ""
    scheme, _, credentials = auth.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    cookie = request.cookies.get(SESSION_COOKIE_NAME)
    return cookie or None


def _context_from_user(user: User) -> RequestContext | None:
    role = Role.parse(user.role)
    if role is None:
        return None
    return RequestContext(
        user_id=int(user.id),
        role=role,
        is_verified=bool(user.is_verified),
        is_business_verified=user.is_business_verified,
        name=user.name,
        email=user.email,
    )


def _resolve_context(request: Request, db: Session) -> RequestContext | None:
    claims = decode_access_token(extract_session_token(request) or "")
    if not claims:
        return None
    try:
        user_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        return None

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return None
    return _context_from_user(user)


def get_request_context(request: Request, db: Session = Depends(get_db)) -> RequestContext:
    ctx = _resolve_context(request, db)
    if ctx is None:
        raise UnauthorizedError(get_error_message("unauthorized"))
    return ctx
