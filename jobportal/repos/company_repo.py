from sqlalchemy.orm import Session

from jobportal.models.company import Company
from jobportal.core.security import generate_id

UPDATABLE_FIELDS = ("name", "description", "website", "location")


def get_by_id(db: Session, company_id: str) -> Company | None:
    return db.query(Company).filter(Company.id == company_id).first()


def get_by_name(db: Session, name: str) -> Company | None:
    return db.query(Company).filter(Company.name == name).first()


def get_all(db: Session) -> list[Company]:
    """Every company in the store, newest first."""
    return db.query(Company).order_by(Company.created_at.desc()).all()


def create(
    db: Session,
    *,
    name: str,
    description: str,
    website: str,
    location: str,
    user_id: str,
) -> Company:
    company = Company(
        id=generate_id(),
        name=name,
        description=description,
        website=website,
        location=location,
        user_id=user_id,
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


def update(db: Session, company_id: str, **fields) -> Company | None:
    """Apply the non-None fields among name/description/website/location."""
    company = get_by_id(db, company_id)
    if not company:
        return None
    for key in UPDATABLE_FIELDS:
        value = fields.get(key)
        if value is not None:
            setattr(company, key, value)
    db.commit()
    db.refresh(company)
    return company
