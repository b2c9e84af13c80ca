from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .client import DEFAULT_API_URL, ZenHubClient

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ZenHubConfig:
    token: str
    base_url: str = DEFAULT_API_URL
    check_status_on_writes: bool = False


def load_env_config(*, use_dotenv: bool = True) -> ZenHubConfig:
    """Load ZenHub settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    token = os.getenv("ZENHUB_API_TOKEN", "").strip()
    base_url = os.getenv("ZENHUB_BASE_URL", "").strip() or DEFAULT_API_URL
    check_writes = (
        os.getenv("ZENHUB_CHECK_STATUS_ON_WRITES", "").strip().lower() in _TRUTHY
    )
    return ZenHubConfig(
        token=token, base_url=base_url, check_status_on_writes=check_writes
    )


def create_client_from_env(**kwargs) -> ZenHubClient:
    """Create a ZenHubClient from environment variables; kwargs win over env."""
    cfg = load_env_config()
    if not cfg.token:
        raise ValueError("Missing ZENHUB_API_TOKEN in environment.")
    kwargs.setdefault("base_url", cfg.base_url)
    kwargs.setdefault("check_status_on_writes", cfg.check_status_on_writes)
    return ZenHubClient(cfg.token, **kwargs)


__all__ = ["ZenHubConfig", "load_env_config", "create_client_from_env"]
