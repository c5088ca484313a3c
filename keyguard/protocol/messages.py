"""Keyguard request/response messages.

Every message shares a common envelope (status and user id) handled by
:class:`KeyguardMessage`. Subclasses declare their payload as
:class:`BufferField` attributes, in wire order, and inherit the payload
hooks that walk those fields.
"""

from __future__ import annotations

from typing import Any, ClassVar

from .buffer import SizedBuffer
from .fields import MessageDecodeError, field_size, read_field, write_field
from .protocol import (
    ENVELOPE_HEADER_SIZE,
    ENVELOPE_HEADER_STRUCT,
    MAX_FIELD_LENGTH,
    STATUS_SIZE,
    STATUS_STRUCT,
    UINT32_MAX,
    USER_ID_SIZE,
    USER_ID_STRUCT,
    Status,
)


class BufferField:
    """Owned :class:`SizedBuffer` slot on a message.

    Assigning a buffer moves it into the message (the caller's buffer is
    left empty) and securely releases whatever the slot held before.
    Assigning ``None`` empties the slot.
    """

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self._attr = f"_field_{name}"

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        buffer = instance.__dict__.get(self._attr)
        if buffer is None:
            buffer = SizedBuffer()
            instance.__dict__[self._attr] = buffer
        return buffer

    def __set__(self, instance: Any, value: SizedBuffer | None) -> None:
        current: SizedBuffer | None = instance.__dict__.get(self._attr)
        if value is not None and value is current:
            return
        incoming = value.take() if value is not None else SizedBuffer()
        if current is not None:
            current.release()
        instance.__dict__[self._attr] = incoming


class KeyguardMessage:
    """Base envelope for all keyguard messages.

    Wire layout: ``[status]`` when the status is not OK, otherwise
    ``[status][user_id][payload]``. The payload is whatever the subclass
    fields encode to, in declaration order.
    """

    _FIELDS: ClassVar[tuple[str, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        own = tuple(name for name, value in vars(cls).items() if isinstance(value, BufferField))
        cls._FIELDS = cls._FIELDS + own

    def __init__(self, user_id: int = 0, *, status: Status = Status.OK) -> None:
        self.status = Status(status)
        self.user_id = user_id

    @property
    def user_id(self) -> int:
        return self._user_id

    @user_id.setter
    def user_id(self, value: int) -> None:
        if not 0 <= value <= UINT32_MAX:
            raise ValueError(f"User id {value} outside 32-bit range")
        self._user_id = value

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Payload field names in wire order."""
        return cls._FIELDS

    # -- Envelope -----------------------------------------------------------

    def serialized_size(self) -> int:
        """Size in bytes of :meth:`serialize` for the current state."""
        if self.status != Status.OK:
            return STATUS_SIZE
        return ENVELOPE_HEADER_SIZE + self._payload_size()

    def serialize(self) -> bytearray:
        """Encode the message into a freshly allocated buffer.

        The result may carry secrets; callers that are done with it can
        wipe it with :func:`keyguard.security.secure_zero`.
        """
        if self.status != Status.OK:
            return bytearray(STATUS_STRUCT.build(int(self.status)))

        out = bytearray(self.serialized_size())
        out[:ENVELOPE_HEADER_SIZE] = ENVELOPE_HEADER_STRUCT.build(
            {"status": int(self.status), "user_id": self.user_id}
        )
        self._write_payload(out, ENVELOPE_HEADER_SIZE)
        return out

    def deserialize(
        self,
        payload: bytes | bytearray | memoryview,
        end: int | None = None,
        *,
        max_field_length: int = MAX_FIELD_LENGTH,
    ) -> Status:
        """Replace this message's state with the one encoded in ``payload[:end]``.

        Malformed input never raises; it yields ``Status.INVALID``, which is
        also stored as the message status. When the decoded status is not
        OK nothing past it is read and the payload fields are left as they
        were.
        """
        data = memoryview(payload).cast("B")
        if end is None:
            end = data.nbytes
        elif not 0 <= end <= data.nbytes:
            raise ValueError(f"end {end} outside payload of {data.nbytes} bytes")

        if end < STATUS_SIZE:
            self.status = Status.INVALID
            return self.status

        self.status = Status.from_wire(STATUS_STRUCT.parse(bytes(data[:STATUS_SIZE])))
        offset = STATUS_SIZE
        if self.status != Status.OK:
            return self.status

        if end - offset < USER_ID_SIZE:
            self.status = Status.INVALID
            return self.status

        self.user_id = USER_ID_STRUCT.parse(bytes(data[offset : offset + USER_ID_SIZE]))
        offset += USER_ID_SIZE
        self.status = self._read_payload(data, offset, end, max_field_length=max_field_length)
        return self.status

    # -- Payload hooks --------------------------------------------------------

    def _payload_size(self) -> int:
        return sum(field_size(getattr(self, name)) for name in self._FIELDS)

    def _write_payload(self, out: bytearray, offset: int) -> None:
        for name in self._FIELDS:
            offset = write_field(out, offset, getattr(self, name))

    def _read_payload(
        self,
        data: memoryview,
        offset: int,
        end: int,
        *,
        max_field_length: int = MAX_FIELD_LENGTH,
    ) -> Status:
        self._release_fields()
        try:
            for name in self._FIELDS:
                buffer, offset = read_field(data, offset, end, max_length=max_field_length)
                setattr(self, name, buffer)
        except MessageDecodeError:
            return Status.INVALID
        return Status.OK

    # -- Ownership ------------------------------------------------------------

    def _release_fields(self) -> None:
        for name in self._FIELDS:
            getattr(self, name).release()

    def release(self) -> None:
        """Securely release every payload buffer."""
        self._release_fields()

    def __enter__(self) -> "KeyguardMessage":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._FIELDS)
        prefix = f"status={self.status.name}, user_id={self.user_id}"
        return f"{type(self).__name__}({prefix}{', ' + fields if fields else ''})"


class EnrollRequest(KeyguardMessage):
    """Password to enroll for a user."""

    provided_password = BufferField()

    def __init__(
        self,
        user_id: int = 0,
        provided_password: SizedBuffer | None = None,
        *,
        status: Status = Status.OK,
    ) -> None:
        super().__init__(user_id, status=status)
        self.provided_password = provided_password


class EnrollResponse(KeyguardMessage):
    """Password handle produced by a successful enrollment."""

    enrolled_password_handle = BufferField()

    def __init__(
        self,
        user_id: int = 0,
        enrolled_password_handle: SizedBuffer | None = None,
        *,
        status: Status = Status.OK,
    ) -> None:
        super().__init__(user_id, status=status)
        self.enrolled_password_handle = enrolled_password_handle

    def set_enrolled_password_handle(self, password_handle: SizedBuffer) -> None:
        self.enrolled_password_handle = password_handle


class VerifyRequest(KeyguardMessage):
    """Password to check against a previously enrolled password handle."""

    password_handle = BufferField()
    provided_password = BufferField()

    def __init__(
        self,
        user_id: int = 0,
        password_handle: SizedBuffer | None = None,
        provided_password: SizedBuffer | None = None,
        *,
        status: Status = Status.OK,
    ) -> None:
        super().__init__(user_id, status=status)
        self.password_handle = password_handle
        self.provided_password = provided_password


class VerifyResponse(KeyguardMessage):
    """Verification token issued when the password matched."""

    verification_token = BufferField()

    def __init__(
        self,
        user_id: int = 0,
        verification_token: SizedBuffer | None = None,
        *,
        status: Status = Status.OK,
    ) -> None:
        super().__init__(user_id, status=status)
        self.verification_token = verification_token

    def set_verification_token(self, verification_token: SizedBuffer) -> None:
        self.verification_token = verification_token


MESSAGE_TYPES: dict[str, type[KeyguardMessage]] = {
    "enroll-request": EnrollRequest,
    "enroll-response": EnrollResponse,
    "verify-request": VerifyRequest,
    "verify-response": VerifyResponse,
}


__all__ = [
    "MESSAGE_TYPES",
    "BufferField",
    "EnrollRequest",
    "EnrollResponse",
    "KeyguardMessage",
    "VerifyRequest",
    "VerifyResponse",
]
