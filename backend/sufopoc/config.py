import os
from pathlib import Path
from dotenv import load_dotenv

# Override=True so changes in backend/.env take effect on process reload (and not get
# stuck on old environment variables).
#
# For automated tests (SQLite), we need to prevent backend/.env from overriding the
# test DATABASE_URL. Set DISABLE_DOTENV=1 to skip loading .env.
if os.getenv("DISABLE_DOTENV") != "1":
    load_dotenv(override=True)


def _env_bool(name: str, default: str = "1") -> bool:
    v = (os.getenv(name, default) or default).strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


_raw_database_url = (os.getenv("DATABASE_URL") or "").strip()
# Default to a local SQLite DB for dev so the backend can start out-of-the-box.
# Use an absolute path so it works regardless of current working directory.
_default_sqlite_path = (Path(__file__).resolve().parent.parent / "dev.db").as_posix()
DATABASE_URL = _raw_database_url or f"sqlite:///{_default_sqlite_path}"

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()

# Auth / JWT
# NOTE: keep a default for local dev so the server can boot even if SECRET_KEY isn't set.
SECRET_KEY = os.getenv("SECRET_KEY", "dev_secret_change_me")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)) or "10080")
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "sufopoc_session")
SESSION_COOKIE_SECURE = _env_bool("SESSION_COOKIE_SECURE", "0")

# Ambassador one-time codes
VERIFICATION_CODE_TTL_HOURS = int(os.getenv("VERIFICATION_CODE_TTL_HOURS", "24") or "24")

# Notifications
# Every signup / application / contact message is copied to this mailbox.
ADMIN_EMAIL = (os.getenv("ADMIN_EMAIL") or "customer@sufopoc.com").strip()
# Used to build links inside emails (e.g. the ambassador verification page).
APP_BASE_URL = (os.getenv("APP_BASE_URL") or "http://localhost:3000").rstrip("/")

# SMTP (leave SMTP_HOST empty in dev: emails are logged instead of sent)
SMTP_HOST = (os.getenv("SMTP_HOST") or "").strip()
SMTP_PORT = int((os.getenv("SMTP_PORT") or "587").strip())
SMTP_USER = (os.getenv("SMTP_USER") or "").strip()
SMTP_PASS = (os.getenv("SMTP_PASS") or "").strip()
SMTP_FROM = (os.getenv("SMTP_FROM") or SMTP_USER or "noreply@jobs.sufopoc.com").strip()
SMTP_TLS = _env_bool("SMTP_TLS", "1")
SMTP_TIMEOUT_S = float(os.getenv("SMTP_TIMEOUT_S", "15") or "15")

FRONTEND_ORIGINS = [
    origin.strip()
    for origin in os.getenv("FRONTEND_ORIGINS", "").split(",")
    if origin.strip()
]
