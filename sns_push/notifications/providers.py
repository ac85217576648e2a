from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any

import boto3
from botocore.client import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from sns_push.config import Settings, missing_credentials
from sns_push.models.notification import EndpointArn
from sns_push.notifications.errors import (
    EndpointDisabledError,
    EndpointNotFoundError,
    MissingCredentialsError,
    OtherRelayError,
    RelayError,
    ThrottledError,
    TransientError,
)

logger = logging.getLogger(__name__)

_ERROR_CODES: dict[str, type[RelayError]] = {
    "EndpointDisabled": EndpointDisabledError,
    "NotFound": EndpointNotFoundError,
    "Throttled": ThrottledError,
    "Throttling": ThrottledError,
    "KMSThrottling": ThrottledError,
    "InternalError": TransientError,
    "InternalFailure": TransientError,
    "ServiceUnavailable": TransientError,
}

_TRANSIENT_TRANSPORT_ERRORS = (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError)


def relay_error_from(exc: Exception) -> RelayError:
    """Map a botocore failure onto the relay error taxonomy."""
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        code = error.get("Code", "") or "Unknown"
        message = error.get("Message", "") or str(exc)
        return _ERROR_CODES.get(code, OtherRelayError)(message, code=code)
    if isinstance(exc, _TRANSIENT_TRANSPORT_ERRORS):
        return TransientError(str(exc), code=type(exc).__name__)
    return OtherRelayError(str(exc), code=type(exc).__name__)


class BaseRelayClient(ABC):
    name: str = "base"

    @abstractmethod
    def create_platform_endpoint(self, platform_application_arn: str, token: str) -> EndpointArn:
        raise NotImplementedError

    @abstractmethod
    def publish(self, target_arn: EndpointArn, message: str, message_structure: str = "json") -> str:
        raise NotImplementedError


class MockRelayClient(BaseRelayClient):
    """Offline relay. Endpoint ARNs are stable per (application, token)."""

    name = "mock"

    def create_platform_endpoint(self, platform_application_arn: str, token: str) -> EndpointArn:
        endpoint_id = uuid.uuid5(uuid.NAMESPACE_URL, f"{platform_application_arn}/{token}")
        base = platform_application_arn.replace(":app/", ":endpoint/", 1)
        return f"{base}/{endpoint_id}"

    def publish(self, target_arn: EndpointArn, message: str, message_structure: str = "json") -> str:
        _ = (target_arn, message, message_structure)
        return str(uuid.uuid4())


class SnsRelayClient(BaseRelayClient):
    """Amazon SNS through boto3. Signing, retries and credentials stay with botocore."""

    name = "sns"

    def __init__(
        self,
        *,
        region: str | None = None,
        endpoint_url: str | None = None,
        timeout_seconds: int = 10,
        client: Any | None = None,
    ) -> None:
        if client is None:
            session = boto3.session.Session()
            client = session.client(
                "sns",
                region_name=region,
                endpoint_url=endpoint_url,
                config=Config(connect_timeout=timeout_seconds, read_timeout=timeout_seconds),
            )
        self.client = client

    def create_platform_endpoint(self, platform_application_arn: str, token: str) -> EndpointArn:
        try:
            response = self.client.create_platform_endpoint(
                PlatformApplicationArn=platform_application_arn,
                Token=token,
            )
        except (ClientError, BotoCoreError) as exc:
            error = relay_error_from(exc)
            logger.warning("SNS CreatePlatformEndpoint failed (%s): %s", error.kind, error)
            raise error from exc

        endpoint_arn = response.get("EndpointArn")
        if not endpoint_arn:
            raise OtherRelayError("CreatePlatformEndpoint response has no EndpointArn")
        return endpoint_arn

    def publish(self, target_arn: EndpointArn, message: str, message_structure: str = "json") -> str:
        try:
            response = self.client.publish(
                TargetArn=target_arn,
                Message=message,
                MessageStructure=message_structure,
            )
        except (ClientError, BotoCoreError) as exc:
            error = relay_error_from(exc)
            logger.warning("SNS Publish to %s failed (%s): %s", target_arn, error.kind, error)
            raise error from exc

        message_id = response.get("MessageId")
        if not message_id:
            raise OtherRelayError("Publish response has no MessageId")
        return message_id


def build_relay_client(settings: Settings) -> BaseRelayClient:
    if settings.relay_provider == "mock":
        return MockRelayClient()
    if settings.relay_provider == "sns":
        if settings.require_env_credentials:
            missing = missing_credentials()
            if missing:
                raise MissingCredentialsError(missing)
        return SnsRelayClient(
            region=settings.aws_region,
            endpoint_url=settings.sns_endpoint_url,
            timeout_seconds=settings.sns_timeout_seconds,
        )
    raise ValueError(f"Unknown relay provider: {settings.relay_provider}")
