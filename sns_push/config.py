from __future__ import annotations

import os
import re
from dataclasses import dataclass


SUPPORTED_RELAY_PROVIDERS = {"mock", "sns"}
CREDENTIAL_ENV_VARS = ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY")

_REGION_PATTERN = re.compile(r"^[a-z]{2}(-gov|-iso[a-z]*)?-[a-z]+-\d+$")


def _get_first_set(*env_names: str) -> str:
    for env_name in env_names:
        value = os.getenv(env_name, "").strip()
        if value:
            return value
    return ""


def _current_region() -> str:
    raw = _get_first_set("AWS_REGION", "AWS_DEFAULT_REGION") or "us-east-1"
    region = raw.lower()
    if not _REGION_PATTERN.match(region):
        raise ValueError(f"Invalid AWS region: {raw}")
    return region


def _current_relay_provider() -> str:
    raw = os.getenv("PUSH_RELAY_PROVIDER", "mock").strip().lower() or "mock"
    if raw not in SUPPORTED_RELAY_PROVIDERS:
        raise ValueError(f"Invalid PUSH_RELAY_PROVIDER: {raw}. Supported values: {sorted(SUPPORTED_RELAY_PROVIDERS)}")
    return raw


def missing_credentials() -> list[str]:
    return [name for name in CREDENTIAL_ENV_VARS if not os.getenv(name, "").strip()]


@dataclass(frozen=True)
class Settings:
    app_name: str = os.getenv("APP_NAME", "sns_push")
    app_debug: bool = os.getenv("APP_DEBUG", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    relay_provider: str = _current_relay_provider()
    aws_region: str = _current_region()
    sns_endpoint_url: str | None = os.getenv("SNS_ENDPOINT_URL", "").strip() or None
    sns_timeout_seconds: int = int(os.getenv("SNS_TIMEOUT_SECONDS", "10"))
    require_env_credentials: bool = os.getenv("SNS_REQUIRE_ENV_CREDENTIALS", "true").lower() == "true"


settings = Settings()


def get_settings() -> Settings:
    return settings
