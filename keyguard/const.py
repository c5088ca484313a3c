"""Default values shared by the keyguard configuration and device shim."""

from __future__ import annotations

from typing import Final

from .protocol.protocol import MAX_FIELD_LENGTH

KEYGUARD_DEVICE_NAME: Final[str] = "keyguard"

DEFAULT_CONFIG_PATH: Final[str] = "/etc/keyguard/keyguard.toml"
DEFAULT_DEBUG_LOGGING: Final[bool] = False
DEFAULT_MAX_FIELD_LENGTH: Final[int] = MAX_FIELD_LENGTH
DEFAULT_MAX_PASSWORD_LENGTH: Final[int] = 4096
DEFAULT_METRICS_ENABLED: Final[bool] = False

LOG_STREAM_ENV: Final[str] = "KEYGUARD_LOG_STREAM"
