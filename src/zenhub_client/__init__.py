"""zenhub_client package exports."""

from .callbacks import Callback, deliver, submit
from .client import (
    DEFAULT_API_URL,
    ZenHubClient,
    ZenHubError,
    ZenHubStatusError,
    ZenHubTransportError,
)
from .config import ZenHubConfig, create_client_from_env, load_env_config

__all__ = [
    # Client
    "ZenHubClient",
    "DEFAULT_API_URL",
    # Exceptions
    "ZenHubError",
    "ZenHubTransportError",
    "ZenHubStatusError",
    # Callback bridge
    "Callback",
    "deliver",
    "submit",
    # Config helpers
    "ZenHubConfig",
    "load_env_config",
    "create_client_from_env",
]
