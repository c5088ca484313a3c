"""Exclusively owned byte storage for secret material."""

from __future__ import annotations

import hmac
import weakref
from typing import Any

from ..security import secure_zero
from .protocol import UINT32_MAX


class SizedBuffer:
    """Heap-backed byte sequence with an explicit length and a single owner.

    Storage is a ``bytearray`` that is zero-filled before it is dropped,
    whether that happens through :meth:`release`, a ``with`` block, a move
    into a buffer that already held data, or garbage collection of an
    unreleased buffer. A zero-length buffer holds no storage at all.

    Buffers are never copied implicitly. Ownership is transferred with
    :meth:`take` or :meth:`move_from`; the only copy is the explicit
    :meth:`copy_of` constructor.
    """

    __slots__ = ("_data", "_finalizer", "__weakref__")

    def __init__(self, length: int = 0) -> None:
        if not 0 <= length <= UINT32_MAX:
            raise ValueError(f"Buffer length {length} outside 32-bit range")
        self._data: bytearray | None = None
        self._finalizer: weakref.finalize | None = None
        if length:
            self._adopt(bytearray(length))

    @classmethod
    def allocate(cls, length: int) -> "SizedBuffer":
        """Reserve exactly *length* zeroed bytes."""
        return cls(length)

    @classmethod
    def copy_of(cls, data: bytes | bytearray | memoryview) -> "SizedBuffer":
        """Allocate a buffer and copy *data* into it."""
        source = memoryview(data).cast("B")
        buffer = cls(source.nbytes)
        if buffer._data is not None:
            buffer._data[:] = source
        return buffer

    @property
    def length(self) -> int:
        return len(self._data) if self._data is not None else 0

    def view(self) -> memoryview:
        """Read-only view of the contents, valid until the buffer is released."""
        if self._data is None:
            return memoryview(b"")
        return memoryview(self._data).toreadonly()

    def take(self) -> "SizedBuffer":
        """Move the contents into a new buffer and leave this one empty."""
        moved = SizedBuffer()
        data = self._disown()
        if data is not None:
            moved._adopt(data)
        return moved

    def move_from(self, other: "SizedBuffer") -> None:
        """Release the current contents, then take ownership of *other*'s."""
        if other is self:
            return
        self.release()
        data = other._disown()
        if data is not None:
            self._adopt(data)

    def release(self) -> None:
        """Zero the storage and drop it. Safe to call more than once."""
        finalizer = self._finalizer
        self._data = None
        self._finalizer = None
        if finalizer is not None:
            finalizer()

    def _adopt(self, data: bytearray) -> None:
        self._data = data
        self._finalizer = weakref.finalize(self, secure_zero, data)

    def _disown(self) -> bytearray | None:
        data = self._data
        if self._finalizer is not None:
            self._finalizer.detach()
        self._data = None
        self._finalizer = None
        return data

    def __len__(self) -> int:
        return self.length

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SizedBuffer):
            other_view = other.view()
        elif isinstance(other, (bytes, bytearray, memoryview)):
            other_view = memoryview(other)
        else:
            return NotImplemented
        return hmac.compare_digest(self.view(), other_view)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SizedBuffer(length={self.length})"

    def __enter__(self) -> "SizedBuffer":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    def __copy__(self) -> "SizedBuffer":
        raise TypeError("SizedBuffer cannot be copied implicitly; use SizedBuffer.copy_of()")

    def __deepcopy__(self, memo: dict[int, Any]) -> "SizedBuffer":
        raise TypeError("SizedBuffer cannot be copied implicitly; use SizedBuffer.copy_of()")

    def __reduce__(self) -> Any:
        raise TypeError("SizedBuffer cannot be pickled")


__all__ = ["SizedBuffer"]
