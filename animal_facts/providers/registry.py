from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from animal_facts.core.config import Settings, settings as default_settings
from animal_facts.core.errors import UnsupportedKindError
from animal_facts.providers.animals import cat_provider, dog_provider
from animal_facts.providers.base import FactProvider
from animal_facts.providers.http import build_async_client

ANY_ANIMAL = "any"


class AnimalRegistry:
    """Read-only mapping of animal kind -> provider.

    The set of keys is the set of supported animals; "any" resolves against
    whatever is registered at call time. Extending returns a new registry.
    """

    def __init__(self, providers: Iterable[FactProvider] = ()):
        table: dict[str, FactProvider] = {}
        for provider in providers:
            kind = _normalize(provider.kind)
            if not kind or kind == ANY_ANIMAL:
                raise ValueError(f"'{provider.kind}' cannot be registered as an animal")
            if kind in table:
                raise ValueError(f"a provider for '{kind}' is already registered")
            table[kind] = provider
        self._providers: Mapping[str, FactProvider] = MappingProxyType(table)

    def __contains__(self, kind: object) -> bool:
        return isinstance(kind, str) and _normalize(kind) in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def __repr__(self) -> str:
        return f"AnimalRegistry(kinds={list(self.kinds())})"

    def kinds(self) -> tuple[str, ...]:
        return tuple(sorted(self._providers))

    def get(self, kind: str) -> FactProvider:
        try:
            return self._providers[_normalize(kind)]
        except KeyError:
            raise UnsupportedKindError(kind, self.choices()) from None

    def choices(self) -> list[str]:
        """Every value `parse` accepts, concrete kinds first."""
        return [*self.kinds(), ANY_ANIMAL]

    def parse(self, value: str) -> str:
        """Turn caller input into a registered kind or "any" (case-insensitive)."""
        kind = _normalize(value)
        if kind == ANY_ANIMAL or kind in self._providers:
            return kind
        raise UnsupportedKindError(value, self.choices())

    def with_provider(self, provider: FactProvider) -> "AnimalRegistry":
        return AnimalRegistry([*self._providers.values(), provider])


def _normalize(value: str) -> str:
    return (value or "").strip().lower()


# -------------------------------
# Default animals
# -------------------------------
# To add an animal, add a factory here; "any" picks it up automatically.
DEFAULT_PROVIDER_FACTORIES: Mapping[str, Callable[[Settings, Any], FactProvider]] = {
    "cat": lambda s, client: cat_provider(s.cat_api_url, client, s.http_timeout_seconds),
    "dog": lambda s, client: dog_provider(s.dog_api_url, client, s.http_timeout_seconds),
}


def build_registry(settings: Settings | None = None, client: Any = None) -> AnimalRegistry:
    settings = settings or default_settings
    if client is None:
        client = build_async_client(settings)
    return AnimalRegistry(
        factory(settings, client) for factory in DEFAULT_PROVIDER_FACTORIES.values()
    )
