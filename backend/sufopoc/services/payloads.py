"""JSON shapes returned by the API (camelCase keys, ISO timestamps)."""
import json
from datetime import datetime

from ..models.application import Application
from ..models.job import Job
from ..models.opleiding import Opleiding
from ..models.user import User


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if isinstance(value, datetime) else value


def load_json(raw: str | None, default=None):  # noqa: ANN001, ANN201
    if not raw:
        return default
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return default


def user_brief(user: User | None) -> dict | None:
    if user is None:
        return None
    return {"id": user.id, "name": user.name, "email": user.email}


def user_to_public(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "isVerified": bool(user.is_verified),
        "isBusinessVerified": user.is_business_verified,
        "cvUrl": user.cv_url,
        "bio": user.bio,
        "region": user.region,
        "companyName": user.company_name,
        "companyWebsite": user.company_website,
        "companyLogo": user.company_logo,
        "industry": user.industry,
        "employeeCount": user.employee_count,
        "skills": load_json(user.skills, []),
        "interests": load_json(user.interests, []),
        "expertise": load_json(user.expertise, []),
        "portfolioLinks": load_json(user.portfolio_links, []),
        "yearsOfExperience": user.years_of_experience,
        "createdAt": _iso(user.created_at),
    }


def job_to_public(job: Job, *, include_creator: bool = False) -> dict:
    payload = {
        "id": job.id,
        "title": job.title,
        "companyName": job.company_name,
        "category": job.category,
        "jobType": job.job_type,
        "seniorityLevel": job.seniority_level,
        "employmentType": job.employment_type,
        "country": job.country,
        "city": job.city,
        "relocationSupport": bool(job.relocation_support),
        "visaSponsorship": bool(job.visa_sponsorship),
        "housingSupport": bool(job.housing_support),
        "shortDescription": job.short_description,
        "fullDescription": job.full_description,
        "requirements": load_json(job.requirements, []),
        "requiredLanguages": load_json(job.required_languages, []),
        "salaryMin": job.salary_min,
        "salaryMax": job.salary_max,
        "currency": job.currency,
        "applicationDeadline": _iso(job.application_deadline),
        "startDate": _iso(job.start_date),
        "positionsAvailable": job.positions_available,
        "tags": load_json(job.tags, []),
        "isVisible": bool(job.is_visible),
        "isExpired": bool(job.is_expired),
        "createdById": job.created_by_id,
        "createdAt": _iso(job.created_at),
        "updatedAt": _iso(job.updated_at),
    }
    if include_creator:
        creator = user_brief(job.created_by)
        payload["createdBy"] = {"name": creator["name"], "email": creator["email"]} if creator else None
    return payload


def opleiding_to_public(opleiding: Opleiding, *, include_creator: bool = False) -> dict:
    payload = {
        "id": opleiding.id,
        "title": opleiding.title,
        "description": opleiding.description,
        "requirements": opleiding.requirements,
        "location": opleiding.location,
        "duration": opleiding.duration,
        "category": opleiding.category,
        "isVisible": bool(opleiding.is_visible),
        "isExpired": bool(opleiding.is_expired),
        "createdById": opleiding.created_by_id,
        "createdAt": _iso(opleiding.created_at),
        "updatedAt": _iso(opleiding.updated_at),
    }
    if include_creator:
        creator = user_brief(opleiding.created_by)
        payload["createdBy"] = {"name": creator["name"], "email": creator["email"]} if creator else None
    return payload


def application_to_public(application: Application, *, include_user: bool = False, include_posting: bool = False) -> dict:
    payload = {
        "id": application.id,
        "userId": application.user_id,
        "jobId": application.job_id,
        "opleidingId": application.opleiding_id,
        "cvUrl": application.cv_url,
        "coverLetter": application.cover_letter,
        "status": application.status,
        "createdAt": _iso(application.created_at),
        "updatedAt": _iso(application.updated_at),
    }
    if include_user:
        applicant = application.user
        payload["user"] = {"name": applicant.name, "email": applicant.email} if applicant else None
    if include_posting:
        posting = application.posting
        payload["posting"] = (
            {
                "type": "job" if application.job_id is not None else "opleiding",
                "id": posting.id,
                "title": posting.title,
            }
            if posting
            else None
        )
    return payload
