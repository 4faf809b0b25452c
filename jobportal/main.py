import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobportal.config import settings
from jobportal.core.responses import envelope
from jobportal.database import init_db, engine
from jobportal.logging_config import setup_logging
from jobportal.routers import application, company, job, realtime, user

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Job Portal API",
    description="Users, companies, job postings and applications.",
    version="1.0.0",
    docs_url=f"{settings.api_prefix}/api-docs",
    openapi_url=f"{settings.api_prefix}/openapi.json",
    redoc_url=None,
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(user.router, prefix=settings.api_prefix)
app.include_router(company.router, prefix=settings.api_prefix)
app.include_router(job.router, prefix=settings.api_prefix)
app.include_router(application.router, prefix=settings.api_prefix)
app.include_router(realtime.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(message, success=False),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request."
    logger.info("Validation failed on %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content=envelope(message, success=False))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content=envelope("Internal server error.", success=False))


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


PLACEHOLDER_SECRET_KEY = "replace-with-a-long-random-secret-key"


def _placeholder_settings() -> list[str]:
    """Names of settings still holding the values shipped in .env.example."""
    found = []
    if settings.secret_key == PLACEHOLDER_SECRET_KEY:
        found.append("SECRET_KEY")
    if "username:password@" in settings.database_url:
        found.append("DATABASE_URL")
    return found


@app.on_event("startup")
def on_startup():
    env = (settings.app_env or "development").lower()
    logger.info("Starting Job Portal API (env=%s)", env)
    placeholders = _placeholder_settings()
    if placeholders and env in {"production", "prod"}:
        raise RuntimeError(f"Placeholder values not allowed in production: {', '.join(placeholders)}")
    for name in placeholders:
        logger.warning("%s still has its .env.example placeholder value.", name)
    init_db()


@app.get("/")
def root():
    return envelope(f"Job Portal API. Interactive docs at {settings.api_prefix}/api-docs.")
