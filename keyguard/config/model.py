"""Data model for keyguard configuration."""

from __future__ import annotations

from dataclasses import dataclass

from ..const import (
    DEFAULT_DEBUG_LOGGING,
    DEFAULT_MAX_FIELD_LENGTH,
    DEFAULT_MAX_PASSWORD_LENGTH,
    DEFAULT_METRICS_ENABLED,
)
from ..protocol.protocol import UINT32_MAX


@dataclass(slots=True)
class RuntimeConfig:
    """Strongly typed configuration for the device shim."""

    debug_logging: bool = DEFAULT_DEBUG_LOGGING
    max_field_length: int = DEFAULT_MAX_FIELD_LENGTH
    max_password_length: int = DEFAULT_MAX_PASSWORD_LENGTH
    metrics_enabled: bool = DEFAULT_METRICS_ENABLED

    def __post_init__(self) -> None:
        self.max_field_length = self._require_length("max_field_length", self.max_field_length)
        self.max_password_length = self._require_length("max_password_length", self.max_password_length)
        if self.max_password_length > self.max_field_length:
            raise ValueError("max_password_length must be less than or equal to max_field_length")

    @staticmethod
    def _require_length(name: str, value: int) -> int:
        if not 1 <= value <= UINT32_MAX:
            raise ValueError(f"{name} must be between 1 and {UINT32_MAX}")
        return value
