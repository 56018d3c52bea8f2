from fastapi.responses import JSONResponse

from animal_facts.core.errors import FactError, ProviderFailedError, UnsupportedKindError
from animal_facts.core.logging import get_logger
from animal_facts.schemas.fact import ErrorResponse, Fact, FactResponse

logger = get_logger(__name__)


CAUSE_MESSAGES = {
    "timeout": "The {animal} fact provider did not respond in time.",
    "transport": "The {animal} fact provider could not be reached.",
    "upstream_status": "The {animal} fact provider returned an error.",
    "decode": "The {animal} fact provider returned an unexpected response.",
}


def error_status(err: FactError) -> int:
    if isinstance(err, UnsupportedKindError):
        return 400
    if isinstance(err, ProviderFailedError) and err.is_timeout:
        return 504
    return 502


def format_error(err: FactError) -> ErrorResponse:
    """Caller-facing error body; never includes upstream payloads or codes."""
    if isinstance(err, UnsupportedKindError):
        return ErrorResponse(error=str(err), supported=err.supported)

    if isinstance(err, ProviderFailedError):
        template = CAUSE_MESSAGES.get(err.category, "The {animal} fact provider failed.")
        return ErrorResponse(
            error=template.format(animal=err.kind),
            animal=err.kind,
            cause=err.category,
        )

    return ErrorResponse(error="Fetching an animal fact failed.")


def respond_ok(fact: Fact) -> FactResponse:
    body = FactResponse(fact=fact.text, animal=fact.animal)
    logger.info("%s", body.model_dump_json())
    return body


def respond_error(err: FactError) -> JSONResponse:
    status = error_status(err)
    body = format_error(err)
    logger.error("%s %s", status, body.model_dump_json(exclude_none=True))
    return JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))
