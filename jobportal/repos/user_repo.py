from sqlalchemy.orm import Session

from jobportal.models.user import User
from jobportal.core.security import hash_password, generate_id


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(
    db: Session,
    *,
    full_name: str,
    email: str,
    phone_number: str,
    password: str,
    role: str = "student",
    bio: str = "",
    skills: list[str] | None = None,
    resume: str | None = None,
    resume_original_name: str | None = None,
) -> User:
    user = User(
        id=generate_id(),
        full_name=full_name,
        email=email,
        phone_number=phone_number,
        password_hash=hash_password(password),
        role=role,
        bio=bio or "",
        skills=list(skills or []),
        resume=resume,
        resume_original_name=resume_original_name,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_profile(
    db: Session,
    user_id: str,
    *,
    bio: str | None = None,
    skills: list[str] | None = None,
    resume: str | None = None,
    resume_original_name: str | None = None,
) -> User | None:
    """Overwrite only the profile fields that are not None."""
    user = get_by_id(db, user_id)
    if not user:
        return None
    if bio is not None:
        user.bio = bio
    if skills is not None:
        user.skills = list(skills)
    if resume is not None:
        user.resume = resume
    if resume_original_name is not None:
        user.resume_original_name = resume_original_name
    db.commit()
    db.refresh(user)
    return user
