#!/usr/bin/env python3
"""
Create (or reset) the ADMIN account.

    python backend/create_admin.py --password '<new password>'

Email defaults to ADMIN_EMAIL; the password can also come from ADMIN_PASSWORD.
Re-running updates the existing account's name, role and password.
"""

import argparse
import os
import sys
from pathlib import Path

# Make `backend.sufopoc` importable when run as a plain script.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from backend.sufopoc.config import ADMIN_EMAIL  # noqa: E402
from backend.sufopoc import database  # noqa: E402
from backend.sufopoc.models.user import Role, User  # noqa: E402
from backend.sufopoc.utils.security import hash_password  # noqa: E402
from backend.sufopoc.utils.validation import validate_email, validate_password  # noqa: E402


def create_or_update_admin(*, email: str, password: str, name: str = "Admin") -> tuple[User, bool]:
    email = validate_email(email)
    validate_password(password)

    database.init_db()
    db = database.SessionLocal()
    try:
        user = db.query(User).filter(User.email == email).first()
        created = user is None
        if created:
            user = User(email=email)
            db.add(user)
        user.name = name
        user.password = hash_password(password)
        user.role = Role.ADMIN.value
        user.is_verified = True
        user.is_business_verified = None
        user.verification_code = None
        user.verification_code_expires = None
        db.commit()
        db.refresh(user)
        return user, created
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create or update the ADMIN account.")
    parser.add_argument("--email", default=ADMIN_EMAIL)
    parser.add_argument("--name", default="Admin")
    parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"))
    args = parser.parse_args(argv)

    if not args.password:
        parser.error("a password is required (--password or ADMIN_PASSWORD)")

    user, created = create_or_update_admin(email=args.email, password=args.password, name=args.name)
    print(f"✓ Admin user {'created' if created else 'updated'}: {user.email}")
    print("Please change the password after first login!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
