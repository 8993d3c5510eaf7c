import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Response
from sqlalchemy.orm import Session

from ..config import ACCESS_TOKEN_EXPIRE_MINUTES, SESSION_COOKIE_NAME, SESSION_COOKIE_SECURE
from ..database import get_db
from ..schemas.auth import LoginRequest, SignupRequest, VerifyOtpRequest
from ..services import accounts, notifications, verification
from ..utils.dependencies import RequestContext, get_request_context
from ..utils.jwt import create_session_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/signup", status_code=201)
def signup(payload: SignupRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    user, notes = accounts.register_user(db, payload)
    notifications.queue(background_tasks, *notes)
    return {"message": "User created successfully", "userId": user.id}


@router.post("/login")
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)):
    user = accounts.authenticate(db, email=payload.email, password=payload.password, role=payload.role)
    token = create_session_token(user)

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return {
        "access_token": token,
        "token_type": "bearer",
        "user": {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role,
            "isVerified": bool(user.is_verified),
            "isBusinessVerified": user.is_business_verified,
        },
    }


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}


@router.post("/verify-otp")
def verify_otp(payload: VerifyOtpRequest, db: Session = Depends(get_db)):
    verification.confirm_ambassador_code(db, email=payload.email, code=payload.code)
    return {"message": "Account verified successfully"}


@router.get("/me")
def me(ctx: RequestContext = Depends(get_request_context)):
    return {"success": True, "user": ctx.as_dict()}
