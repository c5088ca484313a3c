"""Device shim between callers and a password authenticator.

The authenticator itself (password hashing, handle storage) is supplied by
the embedder through the :class:`Authenticator` protocol. The device copies
caller bytes into owned buffers, builds the request message, hands it to
the authenticator and returns the resulting handle or token. The
``handle_*_message`` variants do the same from serialized wire bytes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, NoReturn, Protocol, TypeVar

from .config.model import RuntimeConfig
from .const import KEYGUARD_DEVICE_NAME
from .metrics import DeviceMetrics
from .protocol.buffer import SizedBuffer
from .protocol.messages import (
    EnrollRequest,
    EnrollResponse,
    KeyguardMessage,
    VerifyRequest,
    VerifyResponse,
)
from .protocol.protocol import Status

logger = logging.getLogger(__name__)

BytesLike = bytes | bytearray | memoryview
RequestT = TypeVar("RequestT", EnrollRequest, VerifyRequest)
ResponseT = TypeVar("ResponseT", bound=KeyguardMessage)


class KeyguardDeviceError(RuntimeError):
    """Raised when the device rejects an enroll or verify call."""


class Authenticator(Protocol):
    """Password authenticator driven by the device.

    Implementations read the request buffers and populate the response,
    setting ``response.status`` to ``Status.INVALID`` on failure.
    """

    def enroll(self, request: EnrollRequest, response: EnrollResponse) -> None: ...

    def verify(self, request: VerifyRequest, response: VerifyResponse) -> None: ...


class KeyguardDevice:
    """Handle to an opened keyguard device."""

    def __init__(
        self,
        authenticator: Authenticator,
        *,
        config: RuntimeConfig | None = None,
        metrics: DeviceMetrics | None = None,
    ) -> None:
        self._authenticator = authenticator
        self._config = config if config is not None else RuntimeConfig()
        if metrics is None and self._config.metrics_enabled:
            metrics = DeviceMetrics()
        self.metrics = metrics
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def enroll(self, user_id: int, desired_password: BytesLike) -> SizedBuffer:
        """Enroll *desired_password* for *user_id* and return the password handle."""
        self._ensure_open()
        self._record_request("enroll")
        if desired_password is None or not memoryview(desired_password).nbytes:
            self._reject("enroll", "empty_password", user_id)
        self._check_password_length("enroll", user_id, desired_password)

        with EnrollRequest(user_id, SizedBuffer.copy_of(desired_password)) as request, EnrollResponse() as response:
            self._authenticator.enroll(request, response)
            if response.status != Status.OK:
                self._reject("enroll", "authenticator", user_id)
            logger.debug("Enrolled password for user %d", user_id)
            return response.enrolled_password_handle.take()

    def verify(
        self,
        user_id: int,
        password_handle: BytesLike,
        provided_password: BytesLike,
    ) -> SizedBuffer:
        """Check *provided_password* against *password_handle*; return the token."""
        self._ensure_open()
        self._record_request("verify")
        if password_handle is None or provided_password is None:
            self._reject("verify", "missing_argument", user_id)
        self._check_password_length("verify", user_id, provided_password)

        with VerifyRequest(
            user_id,
            SizedBuffer.copy_of(password_handle),
            SizedBuffer.copy_of(provided_password),
        ) as request, VerifyResponse() as response:
            self._authenticator.verify(request, response)
            if response.status != Status.OK:
                self._reject("verify", "authenticator", user_id)
            logger.debug("Verified password for user %d", user_id)
            return response.verification_token.take()

    def handle_enroll_message(self, data: BytesLike) -> bytearray:
        """Decode a serialized EnrollRequest and return the serialized response."""
        return self._handle_message(
            "enroll", data, EnrollRequest, EnrollResponse, self._authenticator.enroll
        )

    def handle_verify_message(self, data: BytesLike) -> bytearray:
        """Decode a serialized VerifyRequest and return the serialized response."""
        return self._handle_message(
            "verify", data, VerifyRequest, VerifyResponse, self._authenticator.verify
        )

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            logger.info("Keyguard device closed")

    def __enter__(self) -> "KeyguardDevice":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _handle_message(
        self,
        operation: str,
        data: BytesLike,
        request_type: type[RequestT],
        response_type: type[ResponseT],
        call: Callable[[Any, Any], None],
    ) -> bytearray:
        self._ensure_open()
        self._record_request(operation)
        with request_type() as request, response_type() as response:
            status = request.deserialize(data, max_field_length=self._config.max_field_length)
            if status != Status.OK:
                logger.warning(
                    "Rejecting malformed %s request (%d bytes)",
                    operation,
                    memoryview(data).nbytes,
                )
                self._record_rejection(operation, "malformed")
                response.status = Status.INVALID
                return response.serialize()

            password_length = request.provided_password.length
            if password_length > self._config.max_password_length:
                logger.warning(
                    "Rejecting %s request for user %d: password of %d bytes over limit",
                    operation,
                    request.user_id,
                    password_length,
                )
                self._record_rejection(operation, "password_too_long")
                response.status = Status.INVALID
                return response.serialize()

            call(request, response)
            if response.status != Status.OK:
                logger.info("Authenticator rejected %s for user %d", operation, request.user_id)
                self._record_rejection(operation, "authenticator")
            return response.serialize()

    def _record_request(self, operation: str) -> None:
        if self.metrics is not None:
            self.metrics.record_request(operation)

    def _record_rejection(self, operation: str, reason: str) -> None:
        if self.metrics is not None:
            self.metrics.record_rejection(operation, reason)

    def _check_password_length(self, operation: str, user_id: int, password: BytesLike) -> None:
        if memoryview(password).nbytes > self._config.max_password_length:
            self._reject(operation, "password_too_long", user_id)

    def _reject(self, operation: str, reason: str, user_id: int) -> NoReturn:
        self._record_rejection(operation, reason)
        logger.warning("Rejected %s for user %d: %s", operation, user_id, reason)
        raise KeyguardDeviceError(f"{operation} rejected: {reason}")

    def _ensure_open(self) -> None:
        if self._closed:
            raise KeyguardDeviceError("Keyguard device is closed")


def open_device(
    name: str,
    authenticator: Authenticator,
    *,
    config: RuntimeConfig | None = None,
    metrics: DeviceMetrics | None = None,
) -> KeyguardDevice:
    """Open the keyguard device registered under *name*."""
    if name != KEYGUARD_DEVICE_NAME:
        raise KeyguardDeviceError(f"Unknown device {name!r}; expected {KEYGUARD_DEVICE_NAME!r}")
    device = KeyguardDevice(authenticator, config=config, metrics=metrics)
    logger.info("Keyguard device opened")
    return device


__all__ = [
    "Authenticator",
    "KeyguardDevice",
    "KeyguardDeviceError",
    "open_device",
]
