from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.common import PathId
from ..schemas.postings import OpleidingCreate, OpleidingUpdate
from ..services import postings
from ..services.payloads import application_to_public, opleiding_to_public
from ..utils.dependencies import RequestContext, get_request_context

router = APIRouter(prefix="/api/opleidingen", tags=["Opleidingen"])


@router.post("", status_code=201)
def create_opleiding(
    payload: OpleidingCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    opleiding = postings.create_opleiding(db, ctx, payload)
    return {"success": True, "opleiding": opleiding_to_public(opleiding)}


@router.get("")
def list_opleidingen(
    search: str | None = Query(default=None),
    category: str | None = Query(default=None),
    location: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    items = postings.list_public_opleidingen(db, search=search, category=category, location=location)
    return {"success": True, "opleidingen": [opleiding_to_public(o) for o in items]}


@router.get("/{opleiding_id:int}")
def get_opleiding(opleiding_id: PathId, db: Session = Depends(get_db)):
    opleiding = postings.get_opleiding_or_404(db, opleiding_id)
    return {"success": True, "opleiding": opleiding_to_public(opleiding, include_creator=True)}


@router.patch("/{opleiding_id:int}")
def update_opleiding(
    opleiding_id: PathId,
    payload: OpleidingUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    opleiding = postings.update_opleiding(db, ctx, opleiding_id, payload)
    return {"success": True, "opleiding": opleiding_to_public(opleiding)}


@router.delete("/{opleiding_id:int}", status_code=200)
def delete_opleiding(
    opleiding_id: PathId,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    postings.delete_opleiding(db, ctx, opleiding_id)
    return {"success": True, "message": "Opleiding deleted successfully", "deleted_opleiding_id": opleiding_id}


@router.get("/{opleiding_id:int}/applications")
def list_opleiding_applications(
    opleiding_id: PathId,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    opleiding = postings.get_opleiding_or_404(db, opleiding_id)
    applications = postings.list_posting_applications(db, ctx, opleiding)
    return {"success": True, "applications": [application_to_public(a, include_user=True) for a in applications]}
