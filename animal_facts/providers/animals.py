import asyncio
from typing import Any, Callable, Type

import httpx
from pydantic import BaseModel, ValidationError

from animal_facts.core.config import settings as default_settings
from animal_facts.core.errors import DecodeError, TransportError, UpstreamStatusError
from animal_facts.core.logging import get_logger
from animal_facts.schemas.fact import CatFactPayload, DogFactPayload, Fact

logger = get_logger(__name__)


class JsonFactProvider:
    """Provider for an upstream that answers a GET with a JSON document.

    Each animal differs only in its URL, the pydantic model its payload must
    validate against, and how the fact text is pulled out of that model.
    `timeout` bounds the whole fetch, body included; if the caller is
    cancelled, the in-flight request is cancelled with it.
    """

    def __init__(
        self,
        kind: str,
        url: str,
        payload_model: Type[BaseModel],
        extract: Callable[[Any], str | None],
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.kind = kind.strip().lower()
        self.url = url
        self.payload_model = payload_model
        self.extract = extract
        self.client = client
        self.timeout = timeout if timeout is not None else default_settings.http_timeout_seconds

    def __repr__(self) -> str:
        return f"JsonFactProvider(kind={self.kind!r}, url={self.url!r})"

    async def _get(self) -> httpx.Response:
        if self.client is not None:
            return await self.client.get(self.url)
        async with httpx.AsyncClient(follow_redirects=True) as client:
            return await client.get(self.url)

    async def fetch(self) -> Fact:
        try:
            res = await asyncio.wait_for(self._get(), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise TransportError(
                self.kind, f"Request to {self.kind} API timed out", timeout=True
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                self.kind, f"Error during request to {self.kind} API: {e.__class__.__name__}"
            ) from e

        # check status first
        if not 200 <= res.status_code < 300:
            logger.warning(
                "Upstream %s returned status %s for %s", self.kind, res.status_code, self.url
            )
            raise UpstreamStatusError(self.kind, res.status_code)

        try:
            body = res.json()
        except ValueError as e:
            raise DecodeError(self.kind, "body is not valid JSON") from e

        try:
            payload = self.payload_model.model_validate(body)
        except ValidationError as e:
            raise DecodeError(
                self.kind, f"unexpected shape ({e.error_count()} validation errors)"
            ) from e

        text = self.extract(payload)
        if not isinstance(text, str) or not text.strip():
            raise DecodeError(self.kind, "fact text is empty")

        return Fact(text=text, animal=self.kind)


# -------------------------------
# Concrete animals
# -------------------------------
def _cat_text(payload: CatFactPayload) -> str:
    return payload.text


def _dog_text(payload: DogFactPayload) -> str | None:
    return payload.facts[0] if payload.facts else None


def cat_provider(url: str, client: httpx.AsyncClient | None = None, timeout: float | None = None) -> JsonFactProvider:
    return JsonFactProvider("cat", url, CatFactPayload, _cat_text, client=client, timeout=timeout)


def dog_provider(url: str, client: httpx.AsyncClient | None = None, timeout: float | None = None) -> JsonFactProvider:
    return JsonFactProvider("dog", url, DogFactPayload, _dog_text, client=client, timeout=timeout)
