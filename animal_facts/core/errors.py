class FactError(RuntimeError):
    pass


class UnsupportedKindError(FactError):
    """Raised when a caller names an animal that has no registered provider."""

    def __init__(self, value: str, supported: list[str] | tuple[str, ...] = ()):
        self.value = value
        self.supported = list(supported)
        super().__init__(f"'{value}' is not a supported animal.")


# -------------------------------
# Provider failures
# -------------------------------
class ProviderError(FactError):
    """Base class for a single failed upstream fetch."""

    category = "provider"

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(message)


class TransportError(ProviderError):
    """Network failure reaching the upstream: refused, DNS, reset or timeout."""

    def __init__(self, kind: str, message: str, timeout: bool = False):
        self.timeout = timeout
        super().__init__(kind, message)

    @property
    def category(self) -> str:
        return "timeout" if self.timeout else "transport"


class UpstreamStatusError(ProviderError):
    category = "upstream_status"

    def __init__(self, kind: str, status_code: int):
        self.status_code = status_code
        super().__init__(
            kind, f"Request to {kind} API failed with status code: {status_code}"
        )


class DecodeError(ProviderError):
    """The upstream answered 2xx but the body is not the shape we expect."""

    category = "decode"

    def __init__(self, kind: str, reason: str):
        self.reason = reason
        super().__init__(kind, f"Could not decode {kind} API response: {reason}")


# -------------------------------
# Service failures
# -------------------------------
class ProviderFailedError(FactError):
    """A provider failure, tagged with the animal the service resolved to."""

    def __init__(self, requested: str, kind: str, cause: ProviderError):
        self.requested = requested
        self.kind = kind
        self.cause = cause
        super().__init__(f"Failed to fetch a {kind} fact ({cause.category})")

    @property
    def category(self) -> str:
        return self.cause.category

    @property
    def is_timeout(self) -> bool:
        return isinstance(self.cause, TransportError) and self.cause.timeout
