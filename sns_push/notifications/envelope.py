"""Build the SNS structured-message envelope.

The relay expects a JSON object whose values are themselves JSON strings::

    {"default": "Hi", "APNS": "{\\"aps\\":{\\"alert\\":\\"Hi\\"}}", ...}

Publishing it requires ``MessageStructure="json"``. A single-encoded object
is rejected by SNS as malformed.
"""
from __future__ import annotations

import json
from typing import Any

from sns_push.models.notification import PlatformTarget, Push
from sns_push.notifications.encoders import encode
from sns_push.notifications.errors import EncodingError, PushValidationError
from sns_push.utils.validation import require_utf8

DEFAULT_KEY = "default"
MESSAGE_STRUCTURE_JSON = "json"

# APNs and FCM both cap a notification payload at 4 KB.
MAX_PLATFORM_PAYLOAD_BYTES = 4096
# SNS Publish limit.
MAX_MESSAGE_BYTES = 256 * 1024


def to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _byte_size(value: str) -> int:
    return len(value.encode("utf-8"))


def build_envelope_fields(push: Push, default_text: str | None = None) -> dict[str, str]:
    """Return the envelope as a mapping of relay key to string value, before the outer encoding."""
    push.validate_fields()
    fallback = push.default_text() if default_text is None else default_text
    if not isinstance(fallback, str):
        raise PushValidationError("default_text must be a string")
    require_utf8(fallback, "default_text")

    fields: dict[str, str] = {DEFAULT_KEY: fallback}
    for target in PlatformTarget:
        structure = encode(push, target)
        if not isinstance(structure, dict):
            raise EncodingError(f"{target.value} encoder returned {type(structure).__name__}, expected dict")
        payload = to_json(structure)
        if _byte_size(payload) > MAX_PLATFORM_PAYLOAD_BYTES:
            raise PushValidationError(
                f"{target.value} payload is {_byte_size(payload)} bytes, limit is {MAX_PLATFORM_PAYLOAD_BYTES}"
            )
        fields[target.value] = payload
    return fields


def build_envelope(push: Push, default_text: str | None = None) -> str:
    message = to_json(build_envelope_fields(push, default_text))
    if _byte_size(message) > MAX_MESSAGE_BYTES:
        raise PushValidationError(f"Envelope is {_byte_size(message)} bytes, limit is {MAX_MESSAGE_BYTES}")
    return message
