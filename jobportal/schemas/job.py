from pydantic import BaseModel

REQUIRED_JOB_FIELDS = (
    "title",
    "description",
    "requirements",
    "salary",
    "location",
    "job_type",
    "experience",
    "position",
    "company_id",
)


class JobCreate(BaseModel):
    """Raw post-job input. Presence and numeric parsing are checked by the handler
    so that the admin check always runs first."""

    title: str | None = None
    description: str | None = None
    requirements: str | list[str] | None = None  # "python, sql" or ["python", "sql"]
    salary: float | str | None = None
    location: str | None = None
    job_type: str | None = None
    experience: int | str | None = None
    position: int | str | None = None
    company_id: str | None = None

    def missing_fields(self) -> list[str]:
        missing = []
        for name in REQUIRED_JOB_FIELDS:
            value = getattr(self, name)
            if value is None or (isinstance(value, (str, list)) and not value):
                missing.append(name)
        return missing

    def requirement_list(self) -> list[str]:
        raw = self.requirements
        items = raw.split(",") if isinstance(raw, str) else list(raw or [])
        return [r.strip() for r in items if r and r.strip()]
