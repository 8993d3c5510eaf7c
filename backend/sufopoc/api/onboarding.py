from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.onboarding import (
    AmbassadorOnboarding,
    BusinessOnboarding,
    ExpertOnboarding,
    StudentOnboarding,
)
from ..services import accounts, notifications
from ..utils.dependencies import RequestContext, get_request_context

router = APIRouter(prefix="/api/onboarding", tags=["Onboarding"])


@router.post("/student")
def student_onboarding(
    payload: StudentOnboarding,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    accounts.complete_student_onboarding(db, ctx, payload)
    return {"message": "Onboarding completed"}


@router.post("/expert")
def expert_onboarding(
    payload: ExpertOnboarding,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    accounts.complete_expert_onboarding(db, ctx, payload)
    return {"message": "Onboarding completed"}


@router.post("/business")
def business_onboarding(
    payload: BusinessOnboarding,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    accounts.complete_business_onboarding(db, ctx, payload)
    return {"message": "Onboarding completed successfully"}


@router.post("/ambassador")
def ambassador_onboarding(
    payload: AmbassadorOnboarding,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    user, notes = accounts.apply_as_ambassador(db, ctx, payload)
    notifications.queue(background_tasks, *notes)
    return {"message": "Onboarding completed. Pending verification.", "role": user.role}
