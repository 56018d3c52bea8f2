import httpx

from animal_facts.core.config import Settings, settings as default_settings


def build_async_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """Shared client for all upstream providers (connection pooling, headers).

    The per-phase timeout here is a backstop; each provider also bounds its
    whole fetch with the same setting.
    """
    settings = settings or default_settings
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers={
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        },
    )
