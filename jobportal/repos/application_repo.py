from sqlalchemy.orm import Session, joinedload

from jobportal.models.application import Application
from jobportal.models.job import Job
from jobportal.core.security import generate_id


def get_existing(db: Session, job_id: str, applicant_id: str) -> Application | None:
    return (
        db.query(Application)
        .filter(
            Application.job_id == job_id,
            Application.applicant_id == applicant_id,
        )
        .first()
    )


def create(db: Session, job_id: str, applicant_id: str) -> Application:
    """Insert a pending application. The (job, applicant) unique constraint
    raises IntegrityError on a duplicate."""
    application = Application(
        id=generate_id(),
        job_id=job_id,
        applicant_id=applicant_id,
        status="pending",
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    return application


def get_by_id(db: Session, application_id: str) -> Application | None:
    return (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.id == application_id)
        .first()
    )


def get_for_applicant(db: Session, applicant_id: str) -> list[Application]:
    """Caller's applications, newest first, with job and company loaded."""
    return (
        db.query(Application)
        .options(joinedload(Application.job).joinedload(Job.company))
        .filter(Application.applicant_id == applicant_id)
        .order_by(Application.created_at.desc())
        .all()
    )


def update_status(db: Session, application_id: str, status: str) -> Application | None:
    application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        return None
    application.status = status
    db.commit()
    db.refresh(application)
    return application
