from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload

from jobportal.models.application import Application
from jobportal.models.job import Job
from jobportal.core.security import generate_id


def create(
    db: Session,
    *,
    title: str,
    description: str,
    requirements: list[str],
    salary: float,
    location: str,
    job_type: str,
    experience_level: int,
    position: int,
    company_id: str,
    created_by: str,
) -> Job:
    job = Job(
        id=generate_id(),
        title=title,
        description=description,
        requirements=requirements,
        salary=salary,
        location=location,
        job_type=job_type,
        experience_level=experience_level,
        position=position,
        company_id=company_id,
        created_by=created_by,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def get_by_id(db: Session, job_id: str) -> Job | None:
    return db.query(Job).filter(Job.id == job_id).first()


def get_with_applications(db: Session, job_id: str) -> Job | None:
    return (
        db.query(Job)
        .options(joinedload(Job.company), selectinload(Job.applications))
        .filter(Job.id == job_id)
        .first()
    )


def get_with_applicants(db: Session, job_id: str) -> Job | None:
    """Job with each application and its applicant's user record loaded."""
    return (
        db.query(Job)
        .options(selectinload(Job.applications).joinedload(Application.applicant))
        .filter(Job.id == job_id)
        .first()
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search(db: Session, keyword: str | None = None) -> list[Job]:
    """Case-insensitive substring match on title or description, newest first.

    `%` and `_` in the keyword match themselves, not any character.
    """
    q = db.query(Job).options(joinedload(Job.company), selectinload(Job.applications))
    if keyword and keyword.strip():
        term = f"%{_escape_like(keyword.strip())}%"
        q = q.filter(or_(Job.title.ilike(term, escape="\\"), Job.description.ilike(term, escape="\\")))
    return q.order_by(Job.created_at.desc()).all()


def get_by_creator(db: Session, user_id: str) -> list[Job]:
    return (
        db.query(Job)
        .options(joinedload(Job.company), selectinload(Job.applications))
        .filter(Job.created_by == user_id)
        .order_by(Job.created_at.desc())
        .all()
    )
