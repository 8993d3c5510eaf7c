"""
Page-level route guard.

Runs before routing on every request. Public pages and the JSON API pass
through untouched (API handlers do their own 401/403 checks); every other path
needs a valid session, and role-prefixed dashboard areas additionally need the
token's role claim to be allowed for that prefix. Anything else is sent back to
the landing page.
"""
import logging

from fastapi import Request
from fastapi.responses import RedirectResponse

from .dependencies import extract_session_token
from .jwt import decode_access_token
from .roles import path_has_prefix, role_allowed_for_path

logger = logging.getLogger(__name__)

LANDING_PATH = "/"
PUBLIC_PREFIXES = ("/", "/jobs", "/opleidingen", "/auth")
# Not pages: these answer with JSON errors of their own.
PASS_THROUGH_PREFIXES = ("/api", "/health", "/db/health", "/docs", "/redoc", "/openapi.json")


def is_public_path(path: str) -> bool:
    return any(path_has_prefix(path, p) for p in PUBLIC_PREFIXES + PASS_THROUGH_PREFIXES)


def guard_redirect_for(path: str, claims: dict | None) -> str | None:
    """
    Decide whether a request may proceed.

    Returns ``None`` to let it through, or the path to redirect to. Fails
    closed: a missing/invalid token or an unknown role is a redirect.
    """
    if is_public_path(path):
        return None
    if not claims:
        return LANDING_PATH
    if not role_allowed_for_path(claims.get("role"), path):
        return LANDING_PATH
    return None


async def route_guard_middleware(request: Request, call_next):
    path = request.url.path
    claims = None
    if not is_public_path(path):
        claims = decode_access_token(extract_session_token(request) or "")

    target = guard_redirect_for(path, claims)
    if target is not None:
        logger.info("Route guard redirect: path=%s role=%s", path, (claims or {}).get("role"))
        return RedirectResponse(url=target, status_code=307)

    return await call_next(request)
