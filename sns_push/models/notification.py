from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any, Literal, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sns_push.utils.validation import check_badge, require_non_empty, require_utf8

if TYPE_CHECKING:
    from sns_push.notifications.encoders import PlatformEncoder

EndpointArn = str


class PlatformTarget(str, Enum):
    """Relay platform keys, in the order they appear in an envelope."""

    APNS = "APNS"
    APNS_SANDBOX = "APNS_SANDBOX"
    GCM = "GCM"


def application_platform(platform_application_arn: str) -> PlatformTarget | None:
    """Read the platform segment of ``arn:aws:sns:<region>:<account>:app/<PLATFORM>/<name>``."""
    parts = platform_application_arn.split(":", 5)
    if len(parts) != 6:
        return None
    resource = parts[5].split("/")
    if len(resource) < 3 or resource[0] != "app":
        return None
    try:
        return PlatformTarget(resource[1])
    except ValueError:
        return None


def variant_kind(variant: type) -> str | None:
    fields = getattr(variant, "model_fields", {})
    field = fields.get("kind")
    if field is None or not isinstance(field.default, str):
        return None
    return field.default


def encoder_method_name(variant: type) -> str | None:
    """Name of the ``PlatformEncoder`` method that encodes ``variant``, e.g. ``encode_alert``."""
    kind = variant_kind(variant)
    if kind is None:
        return None
    return f"encode_{kind}"


class PushBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def validate_fields(self) -> None:
        check_badge(getattr(self, "badge", None))

    def default_text(self) -> str:
        return ""

    def accept(self, encoder: PlatformEncoder) -> dict[str, Any]:
        # Every (variant, encoder) pair is checked when the encoders module is imported.
        return getattr(encoder, encoder_method_name(type(self)))(self)


class Alert(PushBase):
    """A normal alert style push."""

    kind: Literal["alert"] = "alert"
    text: str = Field(min_length=1, description="Text shown on screen.")
    badge: int | None = Field(default=None, ge=0, strict=True, description="Badge count, where supported.")

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        return require_non_empty(value, "text")

    def validate_fields(self) -> None:
        require_utf8(require_non_empty(self.text, "text"), "text")
        check_badge(self.badge)

    def default_text(self) -> str:
        return self.text


class Silent(PushBase):
    """A silent push, used to wake the app up for background work."""

    kind: Literal["silent"] = "silent"
    badge: int | None = Field(default=None, ge=0, strict=True)


Push = Annotated[Union[Alert, Silent], Field(discriminator="kind")]
PUSH_VARIANTS: tuple[type[PushBase], ...] = get_args(get_args(Push)[0])


class PublishReceipt(BaseModel):
    message_id: str
    endpoint_arn: EndpointArn
    timestamp: datetime
