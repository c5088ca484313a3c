"""Length-prefixed buffer fields, the building block of every payload.

A field is encoded as a 32-bit little-endian byte count followed by that
many raw bytes. :func:`read_field` is the trust boundary for attacker
controlled input: it only ever slices inside ``[offset, end)`` and checks
the declared length against the bytes that are actually left before
allocating anything.
"""

from __future__ import annotations

from .buffer import SizedBuffer
from .protocol import FIELD_LENGTH_SIZE, FIELD_LENGTH_STRUCT, MAX_FIELD_LENGTH


class MessageDecodeError(ValueError):
    """Raised when serialized message bytes are structurally malformed."""


def field_size(buffer: SizedBuffer) -> int:
    """Return the encoded size of *buffer*: length prefix plus contents."""
    return FIELD_LENGTH_SIZE + buffer.length


def write_field(out: bytearray, offset: int, buffer: SizedBuffer) -> int:
    """Write *buffer* at *offset* in a preallocated *out*; return the new offset.

    The caller sizes *out* with :func:`field_size` beforehand, so no bounds
    check happens here.
    """
    length = buffer.length
    out[offset : offset + FIELD_LENGTH_SIZE] = FIELD_LENGTH_STRUCT.build(length)
    offset += FIELD_LENGTH_SIZE
    out[offset : offset + length] = buffer.view()
    return offset + length


def read_field(
    data: memoryview,
    offset: int,
    end: int,
    *,
    max_length: int = MAX_FIELD_LENGTH,
) -> tuple[SizedBuffer, int]:
    """Read one field from ``data[offset:end]``.

    Returns the decoded buffer and the offset just past it.

    Raises:
        MessageDecodeError: If the length prefix is truncated, or the
            declared length runs past *end* or exceeds *max_length*.
    """
    if end - offset < FIELD_LENGTH_SIZE:
        raise MessageDecodeError(
            f"Truncated field: {max(end - offset, 0)} bytes left, "
            f"length prefix needs {FIELD_LENGTH_SIZE}"
        )

    length: int = FIELD_LENGTH_STRUCT.parse(bytes(data[offset : offset + FIELD_LENGTH_SIZE]))
    offset += FIELD_LENGTH_SIZE

    remaining = end - offset
    if length > remaining:
        raise MessageDecodeError(f"Field declares {length} bytes but only {remaining} remain")
    if length > max_length:
        raise MessageDecodeError(f"Field length {length} exceeds limit {max_length}")

    buffer = SizedBuffer.copy_of(data[offset : offset + length])
    return buffer, offset + length


__all__ = [
    "MessageDecodeError",
    "field_size",
    "read_field",
    "write_field",
]
