from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from ..config import ACCESS_TOKEN_EXPIRE_MINUTES, SECRET_KEY

ALGORITHM = "HS256"


def create_access_token(data: dict, expires_minutes: int | None = None) -> str:
    to_encode = data.copy()
    minutes = ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_session_token(user) -> str:  # noqa: ANN001
    """Session token carrying the user id, role and both verification flags."""
    return create_access_token(
        {
            "sub": str(user.id),
            "role": user.role,
            "is_verified": bool(user.is_verified),
            "is_business_verified": bool(user.is_business_verified),
        }
    )


def decode_access_token(token: str) -> dict | None:
    """Return the claims of a valid token, None for expired/invalid/malformed ones."""
    if not token:
        return None
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
