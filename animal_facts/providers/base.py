from typing import Protocol, runtime_checkable

from animal_facts.schemas.fact import Fact


@runtime_checkable
class FactProvider(Protocol):
    """Fetches one fact for exactly one animal kind.

    Providers are built once at startup and shared across requests, so they
    must not keep per-request state. `fetch` is awaited once per request
    and either returns a Fact whose `animal` is `kind`, or raises a
    `ProviderError`.
    """

    kind: str

    async def fetch(self) -> Fact:
        ...
