"""Marshmallow schema for RuntimeConfig validation."""

from __future__ import annotations

from typing import Any, Dict

from marshmallow import RAISE, Schema, ValidationError, fields, post_load, validate, validates_schema

from ..const import (
    DEFAULT_DEBUG_LOGGING,
    DEFAULT_MAX_FIELD_LENGTH,
    DEFAULT_MAX_PASSWORD_LENGTH,
    DEFAULT_METRICS_ENABLED,
)
from ..protocol.protocol import UINT32_MAX
from .model import RuntimeConfig


class RuntimeConfigSchema(Schema):
    """Declarative validation schema for keyguard configuration."""

    class Meta:
        unknown = RAISE

    debug_logging = fields.Bool(load_default=DEFAULT_DEBUG_LOGGING)
    max_field_length = fields.Int(
        load_default=DEFAULT_MAX_FIELD_LENGTH,
        validate=validate.Range(min=1, max=UINT32_MAX),
    )
    max_password_length = fields.Int(
        load_default=DEFAULT_MAX_PASSWORD_LENGTH,
        validate=validate.Range(min=1, max=UINT32_MAX),
    )
    metrics_enabled = fields.Bool(load_default=DEFAULT_METRICS_ENABLED)

    @validates_schema
    def validate_length_consistency(self, data: Dict[str, Any], **kwargs: Any) -> None:
        if data["max_password_length"] > data["max_field_length"]:
            raise ValidationError(
                "max_password_length must be less than or equal to max_field_length",
                field_name="max_password_length",
            )

    @post_load
    def make_config(self, data: Dict[str, Any], **kwargs: Any) -> RuntimeConfig:
        return RuntimeConfig(**data)
