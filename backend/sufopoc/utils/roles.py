from fastapi import Depends

from ..models.user import Role
from .dependencies import RequestContext, get_request_context
from .error_handlers import ForbiddenError, UnauthorizedError, get_error_message

# Roles a visitor may pick at signup (ADMIN accounts come from backend/create_admin.py).
SIGNUP_ROLES = frozenset({Role.STUDENT, Role.EXPERT, Role.AMBASSADOR, Role.BUSINESS})
APPLICANT_ROLES = frozenset({Role.STUDENT, Role.EXPERT})
POSTING_CREATOR_ROLES = frozenset({Role.AMBASSADOR, Role.BUSINESS, Role.ADMIN})

# Role-prefixed dashboard areas -> roles allowed in them. ADMIN is implicitly allowed everywhere.
ROLE_PREFIX_RULES: dict[str, frozenset[Role]] = {
    "/admin": frozenset({Role.ADMIN}),
    "/ambassador": frozenset({Role.AMBASSADOR}),
    "/business": frozenset({Role.BUSINESS}),
    "/student": frozenset({Role.STUDENT, Role.EXPERT}),
    "/expert": frozenset({Role.STUDENT, Role.EXPERT}),
}


def path_has_prefix(path: str, prefix: str) -> bool:
    """Segment-aware prefix match: /admin matches /admin and /admin/x, not /administrator."""
    if prefix == "/":
        return path == "/"
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def role_prefix_for(path: str) -> str | None:
    for prefix in ROLE_PREFIX_RULES:
        if path_has_prefix(path, prefix):
            return prefix
    return None


def role_allowed_for_path(role: Role | str | None, path: str) -> bool:
    """Single authorization table lookup for (role, path prefix)."""
    parsed = Role.parse(role)
    if parsed is None:
        return False
    if parsed is Role.ADMIN:
        return True
    prefix = role_prefix_for(path)
    if prefix is None:
        return True
    return parsed in ROLE_PREFIX_RULES[prefix]


def _role_required(*allowed: Role, unauthorized: bool = False):
    allowed_set = frozenset(allowed)

    def check_role(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
        if ctx.role not in allowed_set:
            if unauthorized:
                raise UnauthorizedError(get_error_message("admin_only"))
            raise ForbiddenError(get_error_message("forbidden"))
        return ctx

    return check_role


# Admin endpoints answer 401 (not 403) for any other role.
admin_only = _role_required(Role.ADMIN, unauthorized=True)
business_only = _role_required(Role.BUSINESS)
