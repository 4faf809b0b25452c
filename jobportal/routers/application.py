import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.config import settings
from jobportal.database import get_db, is_unique_violation
from jobportal.dependencies import get_current_claims
from jobportal.core.responses import envelope, application_to_response, job_to_response
from jobportal.core.security import TokenClaims, is_valid_id
from jobportal.models.application import STATUSES
from jobportal.repos.application_repo import (
    create as create_application,
    get_by_id as get_application_by_id,
    get_existing,
    get_for_applicant,
    update_status as update_application_status,
)
from jobportal.repos.job_repo import get_by_id as get_job_by_id, get_with_applicants
from jobportal.schemas.application import StatusUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/application", tags=["application"])

ALREADY_APPLIED = "You have already applied for this job."


def _require_job_owner(claims: TokenClaims, created_by: str) -> None:
    if settings.enforce_job_owner_checks and created_by != claims.user_id:
        logger.info("Job owner check failed: user=%s owner=%s", claims.user_id, created_by)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the job's creator can manage its applications.",
        )


@router.post("/apply/{job_id}", status_code=status.HTTP_201_CREATED)
def apply_job(
    job_id: str,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
):
    job_id = job_id.strip()
    try:
        if not is_valid_id(job_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid job ID.")
        job = get_job_by_id(db, job_id)
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found.")
        if get_existing(db, job_id, claims.user_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ALREADY_APPLIED)
        try:
            application = create_application(db, job_id, claims.user_id)
        except IntegrityError as e:
            # Concurrent apply won the unique (job, applicant) constraint
            db.rollback()
            if not is_unique_violation(e):
                raise
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ALREADY_APPLIED) from None
        logger.info("User %s applied to job %s", claims.user_id, job_id)
        return envelope("Job applied successfully.", application=application_to_response(application))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Apply failed for user=%s job=%s: %s", claims.user_id, job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e


@router.get("/get/appliedjobs")
def get_applied_jobs(
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
):
    """The caller's applications, newest first, each with its job and company."""
    try:
        applications = get_for_applicant(db, claims.user_id)
        return envelope(applications=[application_to_response(a, with_job=True) for a in applications])
    except Exception as e:
        logger.exception("Listing applied jobs failed for user=%s: %s", claims.user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e


@router.get("/{job_id}/applicants")
def get_applicants(
    job_id: str,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
):
    try:
        job = get_with_applicants(db, job_id) if is_valid_id(job_id) else None
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found.")
        _require_job_owner(claims, job.created_by)
        return envelope(job=job_to_response(job, with_applicants=True))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Listing applicants failed for job=%s: %s", job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e


@router.put("/status/{application_id}/update")
def update_status(
    application_id: str,
    data: StatusUpdate,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
):
    try:
        if not data.status or not data.status.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Status is required.")
        new_status = data.status.strip().lower()
        if new_status not in STATUSES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid status value {data.status}. Allowed values are: 'pending', 'accepted', or 'rejected'.",
            )
        application = get_application_by_id(db, application_id) if is_valid_id(application_id) else None
        if not application:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found.")
        _require_job_owner(claims, application.job.created_by)
        application = update_application_status(db, application_id, new_status)
        logger.info("Application %s set to %s by user=%s", application_id, new_status, claims.user_id)
        return envelope("Status updated successfully.", application=application_to_response(application))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Status update failed for application=%s: %s", application_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error.") from e
