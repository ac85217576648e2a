from __future__ import annotations

import logging

from sns_push.config import get_settings
from sns_push.models.notification import EndpointArn, PublishReceipt, Push, application_platform
from sns_push.notifications.envelope import MESSAGE_STRUCTURE_JSON, build_envelope
from sns_push.notifications.providers import BaseRelayClient, build_relay_client
from sns_push.utils.time import utc_now
from sns_push.utils.validation import require_non_empty, short_token

logger = logging.getLogger(__name__)


class PushService:
    """Register devices and send pushes through the relay.

    Each call makes at most one relay request. Nothing is cached and no error
    is retried or rewrapped; relay errors reach the caller as raised.
    """

    def __init__(self, relay: BaseRelayClient | None = None) -> None:
        self.relay = relay or build_relay_client(get_settings())

    def register_device(self, token: str, platform_application_arn: str) -> EndpointArn:
        """Register a device token and return its endpoint ARN.

        Registering a token that is already known usually yields the same ARN,
        but the value returned here is the one to store.
        """
        require_non_empty(token, "token")
        require_non_empty(platform_application_arn, "platform_application_arn")

        endpoint_arn = self.relay.create_platform_endpoint(platform_application_arn, token)
        platform = application_platform(platform_application_arn)
        logger.info(
            "Registered device %s on %s as %s",
            short_token(token),
            platform.value if platform else "unknown platform",
            endpoint_arn,
        )
        return endpoint_arn

    def send_push(self, push: Push, endpoint_arn: EndpointArn) -> PublishReceipt:
        require_non_empty(endpoint_arn, "endpoint_arn")
        message = build_envelope(push)

        message_id = self.relay.publish(endpoint_arn, message, MESSAGE_STRUCTURE_JSON)
        logger.info("Published %s push to %s (message_id=%s)", push.kind, endpoint_arn, message_id)
        return PublishReceipt(message_id=message_id, endpoint_arn=endpoint_arn, timestamp=utc_now())

    def preview(self, push: Push, default_text: str | None = None) -> str:
        return build_envelope(push, default_text)
