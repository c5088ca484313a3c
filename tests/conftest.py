"""Pytest configuration for keyguard tests."""

from __future__ import annotations

import random
from collections.abc import Callable

import pytest
from keyguard.config.model import RuntimeConfig
from keyguard.device import KeyguardDevice
from keyguard.metrics import DeviceMetrics
from keyguard.protocol.buffer import SizedBuffer

from tests.mocks import FakeAuthenticator


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "fuzz: feed malformed input to the decoders")


def pseudorandom_bytes(size: int) -> bytes:
    """Deterministic bytes seeded by their own length."""
    return random.Random(size).randbytes(size)


@pytest.fixture()
def make_buffer() -> Callable[[int], SizedBuffer]:
    def _make(size: int) -> SizedBuffer:
        return SizedBuffer.copy_of(pseudorandom_bytes(size))

    return _make


@pytest.fixture()
def authenticator() -> FakeAuthenticator:
    return FakeAuthenticator()


@pytest.fixture()
def runtime_config() -> RuntimeConfig:
    return RuntimeConfig(max_password_length=64)


@pytest.fixture()
def device(authenticator: FakeAuthenticator, runtime_config: RuntimeConfig) -> KeyguardDevice:
    return KeyguardDevice(authenticator, config=runtime_config, metrics=DeviceMetrics())
