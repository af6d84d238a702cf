from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .client import HalClient
from .core.logging import setup_logging


@dataclass(frozen=True)
class ClientSettings:
    base_url: str
    timeout_seconds: float = 10.0
    auth_token: Optional[str] = None
    log_level: str = "INFO"


def load_env_config(*, use_dotenv: bool = True) -> ClientSettings:
    """Load client settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()

    raw_timeout = os.getenv("HAL_TIMEOUT_SECONDS", "").strip() or "10"
    try:
        timeout_seconds = float(raw_timeout)
    except ValueError as exc:
        raise ValueError(
            f"HAL_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}"
        ) from exc
    if timeout_seconds <= 0:
        raise ValueError("HAL_TIMEOUT_SECONDS must be positive.")

    return ClientSettings(
        base_url=os.getenv("HAL_BASE_URL", "").strip(),
        timeout_seconds=timeout_seconds,
        auth_token=os.getenv("HAL_AUTH_TOKEN", "").strip() or None,
        log_level=os.getenv("HAL_LOG_LEVEL", "").strip() or "INFO",
    )


def create_client_from_env(*, configure_logging: bool = True, **kwargs) -> HalClient:
    """Create a HalClient from environment variables; applies HAL_LOG_LEVEL."""
    settings = load_env_config()
    if configure_logging:
        setup_logging(settings.log_level)
    headers = dict(kwargs.pop("headers", None) or {})
    if settings.auth_token:
        headers.setdefault("Authorization", f"Bearer {settings.auth_token}")
    kwargs.setdefault("timeout_seconds", settings.timeout_seconds)
    return HalClient(settings.base_url or None, headers=headers, **kwargs)


__all__ = ["ClientSettings", "load_env_config", "create_client_from_env"]
