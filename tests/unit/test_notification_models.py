import pytest
from pydantic import TypeAdapter, ValidationError

from sns_push.models.notification import (
    PUSH_VARIANTS,
    Alert,
    PlatformTarget,
    Push,
    Silent,
    application_platform,
)
from sns_push.notifications.errors import PushValidationError


def test_alert_requires_text() -> None:
    with pytest.raises(ValidationError):
        Alert(text="")
    with pytest.raises(ValidationError):
        Alert(text="   ")


def test_badge_must_be_a_non_negative_int() -> None:
    with pytest.raises(ValidationError):
        Alert(text="Hi", badge=-1)
    with pytest.raises(ValidationError):
        Alert(text="Hi", badge="1")
    with pytest.raises(ValidationError):
        Silent(badge=True)


def test_push_is_immutable() -> None:
    push = Alert(text="Hi")

    with pytest.raises(ValidationError):
        push.text = "Bye"


def test_push_union_dispatches_on_kind() -> None:
    adapter = TypeAdapter(Push)

    assert adapter.validate_python({"kind": "alert", "text": "Hi", "badge": 1}) == Alert(text="Hi", badge=1)
    assert isinstance(adapter.validate_python({"kind": "silent"}), Silent)
    with pytest.raises(ValidationError):
        adapter.validate_python({"kind": "banner", "text": "Hi"})


def test_push_variants_lists_every_variant() -> None:
    assert PUSH_VARIANTS == (Alert, Silent)


def test_default_text() -> None:
    assert Alert(text="Hello").default_text() == "Hello"
    assert Silent().default_text() == ""


@pytest.mark.parametrize(
    ("arn", "expected"),
    [
        ("arn:aws:sns:eu-west-1:000000000000:app/APNS/my-app", PlatformTarget.APNS),
        ("arn:aws:sns:eu-west-1:000000000000:app/APNS_SANDBOX/my-app", PlatformTarget.APNS_SANDBOX),
        ("arn:aws:sns:us-east-1:000000000000:app/GCM/my-app", PlatformTarget.GCM),
        ("arn:aws:sns:us-east-1:000000000000:app/ADM/my-app", None),
        ("not-an-arn", None),
    ],
)
def test_application_platform(arn: str, expected: PlatformTarget | None) -> None:
    assert application_platform(arn) == expected


def test_blank_text_fails_the_same_way_at_build_time() -> None:
    push = Alert.model_construct(text="   ", badge=None)

    with pytest.raises(PushValidationError, match="text must be a non-empty string"):
        push.validate_fields()
