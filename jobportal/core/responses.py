"""Response envelope and entity serializers shared by the routers.

Every body the API returns has the shape ``{"message"?, "success", <data-key>?}``.
"""

from datetime import datetime

from jobportal.models.application import Application
from jobportal.models.company import Company
from jobportal.models.job import Job
from jobportal.models.user import User


def envelope(message: str | None = None, success: bool = True, **data) -> dict:
    body: dict = {}
    if message is not None:
        body["message"] = message
    body["success"] = success
    body.update(data)
    return body


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def profile_to_response(u: User) -> dict:
    return {
        "bio": u.bio or "",
        "skills": list(u.skills or []),
        "resume": u.resume,
        "resume_original_name": u.resume_original_name,
    }


def user_to_response(u: User) -> dict:
    """Public user fields. The password hash never leaves this module."""
    return {
        "id": u.id,
        "full_name": u.full_name,
        "email": u.email,
        "phone_number": u.phone_number,
        "role": u.role,
        "profile": profile_to_response(u),
        "created_at": _iso(u.created_at),
    }


def company_to_response(c: Company) -> dict:
    return {
        "id": c.id,
        "name": c.name,
        "description": c.description,
        "website": c.website,
        "location": c.location,
        "user_id": c.user_id,
        "created_at": _iso(c.created_at),
        "updated_at": _iso(c.updated_at),
    }


def application_to_response(
    a: Application,
    *,
    with_job: bool = False,
    with_applicant: bool = False,
) -> dict:
    data = {
        "id": a.id,
        "job_id": a.job_id,
        "applicant_id": a.applicant_id,
        "status": a.status,
        "created_at": _iso(a.created_at),
        "updated_at": _iso(a.updated_at),
    }
    if with_job:
        data["job"] = job_to_response(a.job, with_company=True) if a.job else None
    if with_applicant:
        data["applicant"] = user_to_response(a.applicant) if a.applicant else None
    return data


def job_to_response(
    j: Job,
    *,
    with_company: bool = False,
    with_applications: bool = False,
    with_applicants: bool = False,
) -> dict:
    data = {
        "id": j.id,
        "title": j.title,
        "description": j.description,
        "requirements": list(j.requirements or []),
        "salary": j.salary,
        "location": j.location,
        "job_type": j.job_type,
        "experience_level": j.experience_level,
        "position": j.position,
        "company_id": j.company_id,
        "created_by": j.created_by,
        "created_at": _iso(j.created_at),
    }
    if with_company:
        data["company"] = company_to_response(j.company) if j.company else None
    if with_applications or with_applicants:
        data["applications"] = [
            application_to_response(a, with_applicant=with_applicants) for a in j.applications
        ]
    else:
        data["applications"] = [a.id for a in j.applications]
    return data
