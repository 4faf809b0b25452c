from pydantic import BaseModel


class CompanyRegister(BaseModel):
    """All fields are checked for presence in the handler, not here."""

    name: str | None = None
    description: str | None = None
    website: str | None = None
    location: str | None = None


class CompanyUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    website: str | None = None
    location: str | None = None
