import logging
import math

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobportal.database import get_db
from jobportal.dependencies import get_current_admin, get_current_claims
from jobportal.core.responses import envelope, job_to_response
from jobportal.core.security import TokenClaims, is_valid_id
from jobportal.repos.company_repo import get_by_id as get_company_by_id
from jobportal.repos.job_repo import (
    create as create_job,
    get_by_creator,
    get_with_applications,
    search as search_jobs,
)
from jobportal.schemas.job import JobCreate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/job", tags=["job"])


def _parse_number(value, cast, field: str):
    try:
        number = cast(str(value).strip()) if isinstance(value, str) else cast(value)
    except (TypeError, ValueError, OverflowError):
        number = None
    if number is None or not math.isfinite(number):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Field '{field}' must be a number.",
        )
    return number


@router.post("/admin/post-job", status_code=status.HTTP_201_CREATED)
def post_job(
    data: JobCreate,
    db: Session = Depends(get_db),
    admin: TokenClaims = Depends(get_current_admin),
):
    try:
        missing = data.missing_fields()
        if missing:
            logger.info("Post job rejected, missing fields: %s", ", ".join(missing))
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Something is missing.")
        salary = _parse_number(data.salary, float, "salary")
        experience_level = _parse_number(data.experience, int, "experience")
        position = _parse_number(data.position, int, "position")

        company = get_company_by_id(db, data.company_id) if is_valid_id(data.company_id) else None
        if not company:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found.")

        job = create_job(
            db,
            title=data.title,
            description=data.description,
            requirements=data.requirement_list(),
            salary=salary,
            location=data.location,
            job_type=data.job_type,
            experience_level=experience_level,
            position=position,
            company_id=company.id,
            created_by=admin.user_id,
        )
        logger.info("Job posted: %s (%s) by admin=%s", job.title, job.id, admin.user_id)
        return envelope("New job created successfully.", job=job_to_response(job, with_company=True))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Post job failed for admin=%s: %s", admin.user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e


@router.get("/get/jobs")
def get_all_jobs(
    keyword: str = "",
    db: Session = Depends(get_db),
    _claims: TokenClaims = Depends(get_current_claims),
):
    """Jobs whose title or description contains keyword (case-insensitive), newest first."""
    try:
        jobs = search_jobs(db, keyword)
        logger.debug("GET /job/get/jobs keyword=%r count=%d", keyword, len(jobs))
        return envelope(jobs=[job_to_response(j, with_company=True) for j in jobs])
    except Exception as e:
        logger.exception("Job search failed for keyword=%r: %s", keyword, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e


@router.get("/get/jobs/{job_id}")
def get_job_by_id(
    job_id: str,
    db: Session = Depends(get_db),
    _claims: TokenClaims = Depends(get_current_claims),
):
    try:
        job = get_with_applications(db, job_id) if is_valid_id(job_id) else None
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found.")
        return envelope(job=job_to_response(job, with_company=True, with_applications=True))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Get job failed for id=%s: %s", job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e


@router.get("/admin/jobs")
def get_admin_jobs(
    db: Session = Depends(get_db),
    admin: TokenClaims = Depends(get_current_admin),
):
    """Jobs posted by the calling admin, newest first."""
    try:
        jobs = get_by_creator(db, admin.user_id)
        if not jobs:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Jobs not found.")
        return envelope(jobs=[job_to_response(j, with_company=True) for j in jobs])
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Listing jobs failed for admin=%s: %s", admin.user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e
