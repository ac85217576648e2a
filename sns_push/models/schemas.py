from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from sns_push.models.notification import PlatformTarget, Push


class DeviceRegistrationRequest(BaseModel):
    token: str = Field(min_length=1)
    platform_application_arn: str = Field(min_length=1)


class DeviceRegistrationResponse(BaseModel):
    endpoint_arn: str
    platform: PlatformTarget | None = None


class SendPushRequest(BaseModel):
    endpoint_arn: str = Field(min_length=1)
    push: Push


class EnvelopePreviewRequest(BaseModel):
    push: Push
    default_text: str | None = None


class EnvelopePreviewResponse(BaseModel):
    message: str
    message_structure: Literal["json"] = "json"
