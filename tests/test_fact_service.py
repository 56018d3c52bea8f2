import asyncio
import random
from collections import Counter

import pytest

from animal_facts.core.errors import (
    DecodeError,
    ProviderFailedError,
    TransportError,
    UnsupportedKindError,
    UpstreamStatusError,
)
from animal_facts.providers.animals import cat_provider
from animal_facts.providers.registry import AnimalRegistry
from animal_facts.services.fact_service import FactService

TRIALS = 10_000


@pytest.fixture
def providers(stub_provider):
    return {"cat": stub_provider("cat"), "dog": stub_provider("dog")}


@pytest.fixture
def service(providers):
    return FactService(AnimalRegistry(providers.values()), rng=random.Random(1234))


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", ["cat", "dog"])
async def test_explicit_kind_calls_only_its_provider(service, providers, kind):
    fact = await service.get_fact(kind)

    assert fact.animal == kind
    assert fact.text
    assert providers[kind].calls == 1
    assert sum(p.calls for k, p in providers.items() if k != kind) == 0


@pytest.mark.asyncio
async def test_kind_lookup_is_case_insensitive(service, providers):
    assert (await service.get_fact("DoG")).animal == "dog"
    assert providers["dog"].calls == 1


@pytest.mark.asyncio
async def test_unregistered_kind_is_unsupported(service, providers):
    with pytest.raises(UnsupportedKindError) as exc_info:
        await service.get_fact("giraffe")

    assert exc_info.value.value == "giraffe"
    assert all(p.calls == 0 for p in providers.values())


@pytest.mark.asyncio
async def test_any_returns_fact_from_the_provider_it_picked(service, providers):
    for _ in range(50):
        fact = await service.get_fact("any")
        assert fact.animal in providers
    assert sum(p.calls for p in providers.values()) == 50


async def _frequencies(service, trials=TRIALS):
    counts = Counter()
    for _ in range(trials):
        counts[(await service.get_fact("any")).animal] += 1
    return {kind: n / trials for kind, n in counts.items()}


@pytest.mark.asyncio
async def test_any_is_uniform_over_two_kinds(service):
    freqs = await _frequencies(service)

    assert set(freqs) == {"cat", "dog"}
    for share in freqs.values():
        assert 0.45 <= share <= 0.55


@pytest.mark.asyncio
async def test_new_kind_joins_any_pool_without_other_changes(providers, stub_provider):
    registry = AnimalRegistry(providers.values()).with_provider(stub_provider("bird"))
    service = FactService(registry, rng=random.Random(99))

    assert (await service.get_fact("bird")).animal == "bird"

    freqs = await _frequencies(service)
    assert set(freqs) == {"bird", "cat", "dog"}
    for share in freqs.values():
        assert abs(share - 1 / 3) <= 0.05


def test_resolve_any_with_default_rng(providers):
    service = FactService(AnimalRegistry(providers.values()))
    assert service.resolve("any") in providers


@pytest.mark.asyncio
async def test_any_with_empty_registry_is_unsupported():
    with pytest.raises(UnsupportedKindError):
        await FactService(AnimalRegistry()).get_fact("any")


@pytest.mark.asyncio
async def test_upstream_500_is_wrapped_with_kind_and_cause(stub_provider):
    dog = stub_provider("dog", error=UpstreamStatusError("dog", 500))
    service = FactService(AnimalRegistry([dog, stub_provider("cat")]))

    with pytest.raises(ProviderFailedError) as exc_info:
        await service.get_fact("dog")

    err = exc_info.value
    assert err.kind == "dog"
    assert err.requested == "dog"
    assert isinstance(err.cause, UpstreamStatusError)
    assert err.cause.status_code == 500
    assert err.__cause__ is err.cause
    assert err.is_timeout is False
    # no retry
    assert dog.calls == 1


@pytest.mark.asyncio
async def test_timeout_is_wrapped_and_flagged(stub_provider):
    cat = stub_provider("cat", error=TransportError("cat", "timed out", timeout=True))
    service = FactService(AnimalRegistry([cat]))

    with pytest.raises(ProviderFailedError) as exc_info:
        await service.get_fact("cat")

    assert exc_info.value.is_timeout is True
    assert exc_info.value.category == "timeout"


@pytest.mark.asyncio
async def test_slow_cat_upstream_times_out_after_configured_bound(upstream):
    cats = upstream(payload={"text": "Cats purr."}, delay=5.0)
    service = FactService(AnimalRegistry([cat_provider("http://cats.test", client=cats.client(), timeout=0.2)]))

    with pytest.raises(ProviderFailedError) as exc_info:
        await asyncio.wait_for(service.get_fact("cat"), timeout=2.0)

    assert exc_info.value.is_timeout is True
    assert exc_info.value.kind == "cat"


@pytest.mark.asyncio
async def test_failed_any_request_is_not_retried_with_another_kind(stub_provider):
    cat = stub_provider("cat", error=DecodeError("cat", "fact text is empty"))
    dog = stub_provider("dog", error=DecodeError("dog", "fact text is empty"))
    service = FactService(AnimalRegistry([cat, dog]), rng=random.Random(7))

    with pytest.raises(ProviderFailedError) as exc_info:
        await service.get_fact("any")

    assert exc_info.value.requested == "any"
    assert exc_info.value.kind in ("cat", "dog")
    assert cat.calls + dog.calls == 1
