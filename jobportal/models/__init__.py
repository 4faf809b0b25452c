from jobportal.models.user import User
from jobportal.models.company import Company
from jobportal.models.job import Job
from jobportal.models.application import Application

__all__ = [
    "User",
    "Company",
    "Job",
    "Application",
]
