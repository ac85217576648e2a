from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from sns_push.models.notification import PublishReceipt, application_platform
from sns_push.models.schemas import (
    DeviceRegistrationRequest,
    DeviceRegistrationResponse,
    EnvelopePreviewRequest,
    EnvelopePreviewResponse,
    SendPushRequest,
)
from sns_push.notifications.errors import (
    EndpointDisabledError,
    EndpointNotFoundError,
    PushValidationError,
    RelayError,
    ThrottledError,
    TransientError,
)
from sns_push.notifications.service import PushService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["sns-push"])

push_service = PushService()

_RELAY_STATUS: list[tuple[type[RelayError], int]] = [
    (EndpointDisabledError, 410),
    (EndpointNotFoundError, 404),
    (ThrottledError, 429),
    (TransientError, 503),
]


def _relay_http_error(exc: RelayError) -> HTTPException:
    status_code = next((code for cls, code in _RELAY_STATUS if isinstance(exc, cls)), 502)
    return HTTPException(
        status_code=status_code,
        detail={"kind": exc.kind, "code": exc.code, "message": exc.detail},
    )


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.post("/devices", response_model=DeviceRegistrationResponse)
def register_device(request: DeviceRegistrationRequest):
    try:
        endpoint_arn = push_service.register_device(request.token, request.platform_application_arn)
    except PushValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except RelayError as exc:
        raise _relay_http_error(exc) from exc
    return DeviceRegistrationResponse(
        endpoint_arn=endpoint_arn,
        platform=application_platform(request.platform_application_arn),
    )


@router.post("/push", response_model=PublishReceipt)
def send_push(request: SendPushRequest):
    try:
        return push_service.send_push(request.push, request.endpoint_arn)
    except PushValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except RelayError as exc:
        raise _relay_http_error(exc) from exc


@router.post("/push/preview", response_model=EnvelopePreviewResponse)
def preview_push(request: EnvelopePreviewRequest):
    try:
        message = push_service.preview(request.push, request.default_text)
    except PushValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return EnvelopePreviewResponse(message=message)
