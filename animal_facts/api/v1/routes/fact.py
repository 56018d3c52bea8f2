from typing import Optional

from fastapi import APIRouter, Depends, Query

from animal_facts.api.deps import get_fact_service, get_settings
from animal_facts.api.v1.response_formatter import respond_error, respond_ok
from animal_facts.core.config import Settings
from animal_facts.core.errors import FactError
from animal_facts.schemas.fact import ErrorResponse, FactResponse
from animal_facts.services.fact_service import FactService

router = APIRouter()


# -------------------------------
# Fact endpoint
# -------------------------------
@router.get(
    "/fact",
    response_model=FactResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
    tags=["Facts"],
)
async def get_animal_fact(
    animal: Optional[str] = Query(default=None, description='Animal name, or "any" for a random one'),
    service: FactService = Depends(get_fact_service),
    settings: Settings = Depends(get_settings),
):
    # forced animal wins over the query param, which wins over the default;
    # an empty ?animal= is passed through and rejected as unsupported
    if settings.forced_animal:
        requested = settings.forced_animal
    elif animal is not None:
        requested = animal
    else:
        requested = settings.default_animal

    try:
        fact = await service.get_fact(requested)
    except FactError as e:
        return respond_error(e)

    return respond_ok(fact)
