import logging
from contextvars import ContextVar

LOGGER_NAME = "animal_facts"
LOG_FORMAT = (
    "%(asctime)s [%(levelname)s] [%(name)s %(filename)s:%(lineno)d] "
    "[%(request_id)s] %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Set by the request-id middleware for the lifetime of one request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Stamp every record with the id of the request being handled."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def configure_logging(level: str = "INFO") -> logging.Logger:
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    # No-op if the host (uvicorn, pytest) already configured the root logger
    logging.basicConfig(level=level.upper(), handlers=[handler])

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
