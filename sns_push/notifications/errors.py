from __future__ import annotations


class PushError(Exception):
    """Base class for every error raised by sns_push."""


class PushValidationError(PushError, ValueError):
    """A push or its target failed a local constraint. Nothing was sent."""


class EncodingError(PushError):
    """Envelope construction broke an internal invariant."""


class MissingCredentialsError(PushError):
    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        if len(self.missing) > 1:
            message = f"Both {' and '.join(f'`{name}`' for name in self.missing)} env vars are missing"
        else:
            message = f"`{self.missing[0]}` env var is missing"
        super().__init__(message)


class RelayError(PushError):
    """An error reported by the relay (or the transport talking to it)."""

    kind: str = "other"

    def __init__(self, detail: str, code: str | None = None) -> None:
        self.detail = detail
        self.code = code
        super().__init__(detail)

    def __str__(self) -> str:
        if self.code:
            return f"{self.code}: {self.detail}"
        return self.detail


class EndpointDisabledError(RelayError):
    kind = "endpoint_disabled"


class EndpointNotFoundError(RelayError):
    kind = "not_found"


class ThrottledError(RelayError):
    kind = "throttled"


class TransientError(RelayError):
    kind = "transient"


class OtherRelayError(RelayError):
    kind = "other"
