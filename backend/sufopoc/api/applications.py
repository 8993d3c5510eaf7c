from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.applications import ApplicationCreate, ApplicationStatusUpdate
from ..schemas.common import PathId
from ..services import applications as application_service
from ..services import notifications
from ..services.payloads import application_to_public
from ..utils.dependencies import RequestContext, get_request_context

router = APIRouter(prefix="/api/applications", tags=["Applications"])


@router.post("", status_code=201)
def submit_application(
    payload: ApplicationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    application, notes = application_service.submit_application(db, ctx, payload)
    notifications.queue(background_tasks, *notes)
    return {"success": True, "application": application_to_public(application)}


@router.get("")
def list_my_applications(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    items = application_service.list_own_applications(db, ctx)
    return {"success": True, "applications": [application_to_public(a, include_posting=True) for a in items]}


@router.patch("/{application_id:int}")
def update_application_status(
    application_id: PathId,
    payload: ApplicationStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    application, notes = application_service.update_application_status(db, ctx, application_id, payload.status)
    notifications.queue(background_tasks, *notes)
    return {"success": True, "application": application_to_public(application)}
