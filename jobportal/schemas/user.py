from pydantic import BaseModel, EmailStr, Field, field_validator

from jobportal.models.user import ROLES


def _normalize_email(v):
    return v.strip().lower() if isinstance(v, str) else v


def _split_skills(v):
    if isinstance(v, str):
        return [s.strip() for s in v.split(",") if s.strip()]
    return v


class UserRegister(BaseModel):
    full_name: str = Field(min_length=1)
    email: EmailStr
    phone_number: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: str = "student"
    bio: str = ""
    skills: list[str] = Field(default_factory=list)
    resume: str | None = None
    resume_original_name: str | None = None

    @field_validator("email", mode="after")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("role")
    @classmethod
    def role_allowed(cls, v: str) -> str:
        role = (v or "").strip().lower()
        if role not in ROLES:
            raise ValueError("Role must be 'student' or 'admin'")
        return role

    @field_validator("skills", mode="before")
    @classmethod
    def skills_from_csv(cls, v):
        return _split_skills(v)


class UserLogin(BaseModel):
    # Plain str: a malformed email must get the same answer as an unknown one
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        return _normalize_email(v)


class ProfileUpdate(BaseModel):
    bio: str | None = None
    skills: list[str] | None = None
    resume: str | None = None
    resume_original_name: str | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def skills_from_csv(cls, v):
        return _split_skills(v)
