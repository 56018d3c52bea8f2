import random
from typing import Any

from animal_facts.core.errors import ProviderError, ProviderFailedError, UnsupportedKindError
from animal_facts.core.logging import get_logger
from animal_facts.providers.registry import ANY_ANIMAL, AnimalRegistry
from animal_facts.schemas.fact import Fact

logger = get_logger(__name__)


class FactService:
    """Stateless dispatcher from a requested animal to its provider.

    One upstream call per `get_fact`; failures are wrapped once and surfaced,
    never retried here (not even for "any"). Cancelling the awaiting task
    cancels the upstream call.
    """

    def __init__(self, registry: AnimalRegistry, rng: Any = None):
        self.registry = registry
        # SystemRandom keeps no state between draws, so it is safe to share
        self.rng = rng if rng is not None else random.SystemRandom()

    def resolve(self, requested: str) -> str:
        """Map caller input to the concrete kind that will be fetched."""
        kind = self.registry.parse(requested)
        if kind == ANY_ANIMAL:
            kinds = self.registry.kinds()
            if not kinds:
                raise UnsupportedKindError(requested, [])
            kind = self.rng.choice(kinds)
        return kind

    async def get_fact(self, requested: str) -> Fact:
        kind = self.resolve(requested)
        logger.debug("Fetching fact: requested=%s resolved=%s", requested, kind)

        provider = self.registry.get(kind)
        try:
            return await provider.fetch()
        except ProviderError as e:
            logger.error(
                "Provider failed: requested=%s resolved=%s category=%s detail=%s",
                requested,
                kind,
                e.category,
                e,
            )
            raise ProviderFailedError(requested, kind, e) from e
