import logging

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker, declarative_base

from jobportal.config import settings

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
)


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create any missing tables. Existing tables and data are left alone."""
    from jobportal.models import (  # noqa: F401
        User,
        Company,
        Job,
        Application,
    )

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database initialized")
    except Exception as e:
        logger.exception("Database initialization failed: %s", e)
        raise


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity error came from a unique constraint (Postgres 23505 or SQLite)."""
    if getattr(exc.orig, "pgcode", None) == "23505":
        return True
    return "unique constraint" in str(exc.orig).lower()
