from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.common import PathId
from ..schemas.postings import JobCreate, JobUpdate
from ..services import postings
from ..services.payloads import application_to_public, job_to_public
from ..utils.dependencies import RequestContext, get_request_context

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


@router.post("", status_code=201)
def create_job(
    payload: JobCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    job = postings.create_job(db, ctx, payload)
    return {"success": True, "job": job_to_public(job)}


@router.get("")
def list_jobs(
    search: str | None = Query(default=None),
    category: str | None = Query(default=None),
    job_type: str | None = Query(default=None, alias="jobType"),
    country: str | None = Query(default=None),
    employment_type: str | None = Query(default=None, alias="employmentType"),
    db: Session = Depends(get_db),
):
    jobs = postings.list_public_jobs(
        db,
        search=search,
        category=category,
        job_type=job_type,
        country=country,
        employment_type=employment_type,
    )
    return {"success": True, "jobs": [job_to_public(j) for j in jobs]}


@router.get("/{job_id:int}")
def get_job(job_id: PathId, db: Session = Depends(get_db)):
    job = postings.get_job_or_404(db, job_id)
    return {"success": True, "job": job_to_public(job, include_creator=True)}


@router.patch("/{job_id:int}")
def update_job(
    job_id: PathId,
    payload: JobUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    job = postings.update_job(db, ctx, job_id, payload)
    return {"success": True, "job": job_to_public(job)}


@router.delete("/{job_id:int}", status_code=200)
def delete_job(
    job_id: PathId,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    postings.delete_job(db, ctx, job_id)
    return {"success": True, "message": "Job deleted successfully", "deleted_job_id": job_id}


@router.get("/{job_id:int}/applications")
def list_job_applications(
    job_id: PathId,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    job = postings.get_job_or_404(db, job_id)
    applications = postings.list_posting_applications(db, ctx, job)
    return {"success": True, "applications": [application_to_public(a, include_user=True) for a in applications]}
