"""Per-platform payload encoders.

Every push variant is encoded through a visitor: each ``PlatformEncoder``
implements one ``encode_<kind>`` method per variant, and ``PushBase.accept``
calls the method named after the variant's ``kind``. A new variant therefore
needs a new abstract method here (so every encoder has to implement it before
it can be instantiated), and a new ``PlatformTarget`` needs an entry in
``ENCODERS``. ``check_exhaustive`` runs at import and rejects any
(variant, platform) pair without an encoder method.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from sns_push.models.notification import (
    PUSH_VARIANTS,
    Alert,
    PlatformTarget,
    Push,
    PushBase,
    Silent,
    encoder_method_name,
)
from sns_push.notifications.errors import EncodingError

# GCM/FCM has no badge concept. Badges are dropped from GCM payloads on purpose.
GCM_SUPPORTS_BADGE = False


class PlatformEncoder(ABC):
    target: PlatformTarget

    @abstractmethod
    def encode_alert(self, push: Alert) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def encode_silent(self, push: Silent) -> dict[str, Any]:
        raise NotImplementedError


class ApnsEncoder(PlatformEncoder):
    """Production and sandbox APNs share one payload shape."""

    def __init__(self, target: PlatformTarget = PlatformTarget.APNS) -> None:
        self.target = target

    def encode_alert(self, push: Alert) -> dict[str, Any]:
        aps: dict[str, Any] = {"alert": push.text}
        if push.badge is not None:
            aps["badge"] = push.badge
        return {"aps": aps}

    def encode_silent(self, push: Silent) -> dict[str, Any]:
        aps: dict[str, Any] = {"content-available": 1}
        if push.badge is not None:
            aps["badge"] = push.badge
        return {"aps": aps}


class GcmEncoder(PlatformEncoder):
    target = PlatformTarget.GCM

    def encode_alert(self, push: Alert) -> dict[str, Any]:
        # push.badge is intentionally not encoded, see GCM_SUPPORTS_BADGE.
        return {"data": {"message": push.text}}

    def encode_silent(self, push: Silent) -> dict[str, Any]:
        return {"data": {}}


ENCODERS: dict[PlatformTarget, PlatformEncoder] = {
    PlatformTarget.APNS: ApnsEncoder(PlatformTarget.APNS),
    PlatformTarget.APNS_SANDBOX: ApnsEncoder(PlatformTarget.APNS_SANDBOX),
    PlatformTarget.GCM: GcmEncoder(),
}


def check_exhaustive(
    encoders: Mapping[PlatformTarget, PlatformEncoder],
    variants: tuple[type, ...] = PUSH_VARIANTS,
) -> None:
    missing = [target.value for target in PlatformTarget if target not in encoders]
    if missing:
        raise EncodingError(f"No encoder registered for platform(s): {', '.join(missing)}")
    for target, encoder in encoders.items():
        if encoder.target is not target:
            raise EncodingError(f"Encoder for {target.value} is bound to {encoder.target.value}")

    for variant in variants:
        method_name = encoder_method_name(variant)
        if method_name is None:
            raise EncodingError(f"Push variant {variant.__name__} has no string `kind` default")
        if not issubclass(variant, PushBase) or "accept" in vars(variant):
            raise EncodingError(f"Push variant {variant.__name__} must use PushBase.accept")
        unhandled = [
            target.value
            for target, encoder in encoders.items()
            if not callable(getattr(encoder, method_name, None))
        ]
        if unhandled:
            raise EncodingError(
                f"No {method_name}() for {variant.__name__} on platform(s): {', '.join(unhandled)}"
            )


check_exhaustive(ENCODERS)


def encode(push: Push, target: PlatformTarget) -> dict[str, Any]:
    return push.accept(ENCODERS[target])
