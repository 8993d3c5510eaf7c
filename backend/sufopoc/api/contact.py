import logging
from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Request

from ..schemas.contact import BugReportRequest, ContactRequest
from ..services import notifications

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Contact"])


@router.post("/contact")
def contact(payload: ContactRequest, background_tasks: BackgroundTasks):
    fields = payload.model_dump(include={"name", "email", "subject", "message"})
    notifications.queue(
        background_tasks,
        notifications.contact_confirmation(**fields),
        notifications.admin_contact(**fields),
    )
    return {"success": True, "message": "Message sent successfully"}


@router.post("/bug-report")
def bug_report(payload: BugReportRequest, request: Request, background_tasks: BackgroundTasks):
    note = notifications.admin_bug_report(
        title=payload.title,
        description=payload.description,
        steps=payload.steps,
        email=payload.email,
        user_agent=request.headers.get("user-agent") or "Unknown",
        referer=request.headers.get("referer") or "Unknown",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
    notifications.queue(background_tasks, note)
    logger.info("Bug report received: %s", payload.title)
    return {"success": True, "message": "Bug report submitted successfully"}
