import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# INFO on these logs every request or SQL statement
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx")


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        try:
            from jobportal.config import settings
        except Exception:
            return logging.INFO
        level = settings.log_level
    if isinstance(level, str):
        return getattr(logging, level.strip().upper(), logging.INFO)
    return level


def setup_logging(level: int | str | None = None) -> None:
    """Send all app logs to stdout at `level` (default: LOG_LEVEL from settings).

    Calling it again replaces the root handler instead of adding a second one.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(_resolve_level(level))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
