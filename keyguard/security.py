"""Secure erasure for secret-carrying buffers.

Passwords, password handles and verification tokens live in mutable
``bytearray`` storage so they can be overwritten in place before the memory
is handed back to the allocator.

Reference: CWE-14 (compiler removal of code to clear buffers), CWE-226
(sensitive information in resource not removed before reuse).
"""

from __future__ import annotations

import ctypes


def secure_zero(data: bytearray | memoryview) -> None:
    """Securely zero memory, resistant to interpreter optimization.

    Uses ctypes.memset to write zeros directly into the underlying storage
    instead of rebinding or slicing, both of which would leave the old
    bytes behind.

    Args:
        data: Mutable buffer to zero (bytearray or writable memoryview).
              Immutable bytes objects cannot be zeroed.

    Raises:
        TypeError: If data is not a writable buffer.

    Example:
        >>> secret = bytearray(b"hunter2")
        >>> secure_zero(secret)
        >>> assert secret == bytearray(len(secret))
    """
    length = len(data)
    if not length:
        return
    if isinstance(data, memoryview):
        if data.readonly:
            raise TypeError("cannot zero a read-only memoryview")
        length = data.nbytes
    buf = (ctypes.c_char * length).from_buffer(data)
    ctypes.memset(ctypes.addressof(buf), 0, length)


__all__ = [
    "secure_zero",
]
