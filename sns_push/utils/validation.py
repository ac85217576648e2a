from __future__ import annotations

from sns_push.notifications.errors import PushValidationError


def require_non_empty(value: str | None, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise PushValidationError(f"{field} must be a non-empty string")
    return value


def require_utf8(value: str, field: str) -> str:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PushValidationError(f"{field} is not valid UTF-8 text: {exc.reason}") from exc
    return value


def check_badge(badge: object) -> None:
    if badge is None:
        return
    if isinstance(badge, bool) or not isinstance(badge, int):
        raise PushValidationError(f"badge must be an integer, got {type(badge).__name__}")
    if badge < 0:
        raise PushValidationError("badge must not be negative")


def short_token(token: str, keep: int = 12) -> str:
    if len(token) <= keep:
        return token
    return f"{token[:keep]}..."
