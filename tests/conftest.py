from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from sns_push.notifications.errors import RelayError
from sns_push.notifications.providers import BaseRelayClient

APP_ARN = "arn:aws:sns:eu-west-1:000000000000:app/APNS/my-app"
ENDPOINT_ARN = "arn:aws:sns:eu-west-1:000000000000:endpoint/APNS/my-app/6b7d4e2a-0f4c-3c47-9d3b-1a2b3c4d5e6f"


class RecordingRelayClient(BaseRelayClient):
    """Records every relay call and answers from scripted values."""

    name = "recording"

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.endpoint_arns: list[str] = []
        self.message_id = "msg-0001"
        self.error: RelayError | None = None

    def create_platform_endpoint(self, platform_application_arn: str, token: str) -> str:
        self.calls.append(
            ("create_platform_endpoint", {"platform_application_arn": platform_application_arn, "token": token})
        )
        if self.error is not None:
            raise self.error
        if self.endpoint_arns:
            return self.endpoint_arns.pop(0)
        return ENDPOINT_ARN

    def publish(self, target_arn: str, message: str, message_structure: str = "json") -> str:
        self.calls.append(
            ("publish", {"target_arn": target_arn, "message": message, "message_structure": message_structure})
        )
        if self.error is not None:
            raise self.error
        return self.message_id


@pytest.fixture
def relay() -> RecordingRelayClient:
    return RecordingRelayClient()


@pytest.fixture
def test_ctx(relay, monkeypatch) -> Generator[dict, None, None]:
    import sns_push.api.routes as routes_module
    from sns_push.notifications.service import PushService

    monkeypatch.setattr(routes_module, "push_service", PushService(relay), raising=True)

    from sns_push.app import app

    with TestClient(app) as client:
        yield {
            "client": client,
            "relay": relay,
        }
