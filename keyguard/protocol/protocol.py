"""Wire constants and fixed-width layouts for keyguard messages.

All integers on the wire are 32-bit unsigned little-endian, with no padding:

    Error-only message:      [status]
    Success message:         [status=OK][user_id][payload]
    Buffer field (payload):  [length][length raw bytes]
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

from construct import Int32ul, Struct as BinStruct  # type: ignore

UINT32_MAX: Final[int] = 0xFFFFFFFF


class Status(IntEnum):
    """Envelope status codes."""

    OK = 0
    INVALID = 1

    @classmethod
    def from_wire(cls, value: int) -> "Status":
        """Collapse any non-zero wire value to INVALID."""
        return cls.OK if value == cls.OK else cls.INVALID


STATUS_STRUCT: Final = Int32ul
USER_ID_STRUCT: Final = Int32ul
FIELD_LENGTH_STRUCT: Final = Int32ul
ENVELOPE_HEADER_STRUCT: Final = BinStruct(
    "status" / Int32ul,
    "user_id" / Int32ul,
)

STATUS_SIZE: Final[int] = STATUS_STRUCT.sizeof()  # type: ignore
USER_ID_SIZE: Final[int] = USER_ID_STRUCT.sizeof()  # type: ignore
FIELD_LENGTH_SIZE: Final[int] = FIELD_LENGTH_STRUCT.sizeof()  # type: ignore
ENVELOPE_HEADER_SIZE: Final[int] = ENVELOPE_HEADER_STRUCT.sizeof()  # type: ignore

MAX_FIELD_LENGTH: Final[int] = UINT32_MAX


__all__ = [
    "ENVELOPE_HEADER_SIZE",
    "ENVELOPE_HEADER_STRUCT",
    "FIELD_LENGTH_SIZE",
    "FIELD_LENGTH_STRUCT",
    "MAX_FIELD_LENGTH",
    "STATUS_SIZE",
    "STATUS_STRUCT",
    "Status",
    "UINT32_MAX",
    "USER_ID_SIZE",
    "USER_ID_STRUCT",
]
