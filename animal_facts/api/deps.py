from functools import lru_cache

import httpx

from animal_facts.core.config import Settings, settings
from animal_facts.providers.http import build_async_client
from animal_facts.providers.registry import build_registry
from animal_facts.services.fact_service import FactService


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def get_http_client() -> httpx.AsyncClient:
    return build_async_client(settings)


@lru_cache(maxsize=1)
def get_fact_service() -> FactService:
    """Built once per process; the registry and providers are read-only after this."""
    service = FactService(build_registry(settings, client=get_http_client()))

    # Reject a bad default/forced animal at startup instead of blaming callers
    service.registry.parse(settings.default_animal)
    if settings.forced_animal:
        service.registry.parse(settings.forced_animal)

    return service
