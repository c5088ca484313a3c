"""Keyguard wire protocol: owned buffers, field codec and messages."""

from . import buffer, fields, messages, protocol
from .buffer import SizedBuffer
from .fields import MessageDecodeError, field_size, read_field, write_field
from .messages import (
    MESSAGE_TYPES,
    EnrollRequest,
    EnrollResponse,
    KeyguardMessage,
    VerifyRequest,
    VerifyResponse,
)
from .protocol import Status

__all__ = [
    "MESSAGE_TYPES",
    "EnrollRequest",
    "EnrollResponse",
    "KeyguardMessage",
    "MessageDecodeError",
    "SizedBuffer",
    "Status",
    "VerifyRequest",
    "VerifyResponse",
    "buffer",
    "field_size",
    "fields",
    "messages",
    "protocol",
    "read_field",
    "write_field",
]
