"""Tests for the owned, securely released buffer type."""

from __future__ import annotations

import copy
import gc
import pickle

import pytest
from keyguard.protocol.buffer import SizedBuffer
from keyguard.protocol.protocol import UINT32_MAX
from keyguard.security import secure_zero


def test_allocate_reserves_exact_zeroed_length() -> None:
    buffer = SizedBuffer.allocate(16)

    assert buffer.length == 16
    assert len(buffer) == 16
    assert buffer.view() == bytes(16)


def test_zero_length_buffer_has_no_storage() -> None:
    buffer = SizedBuffer.allocate(0)

    assert buffer.length == 0
    assert buffer.view().nbytes == 0
    assert buffer._data is None


def test_allocate_rejects_out_of_range_lengths() -> None:
    with pytest.raises(ValueError):
        SizedBuffer.allocate(-1)
    with pytest.raises(ValueError):
        SizedBuffer.allocate(UINT32_MAX + 1)


def test_copy_of_is_independent_of_source() -> None:
    source = bytearray(b"hunter2")
    buffer = SizedBuffer.copy_of(source)
    source[0] = 0

    assert buffer == b"hunter2"


def test_view_is_read_only() -> None:
    buffer = SizedBuffer.copy_of(b"secret")

    with pytest.raises(TypeError):
        buffer.view()[0] = 0


def test_take_moves_storage_and_empties_source() -> None:
    source = SizedBuffer.copy_of(b"password")
    backing = source.view()

    moved = source.take()

    assert source.length == 0
    assert moved == b"password"
    # Same storage, not a copy.
    assert moved.view().obj is backing.obj


def test_move_from_wipes_previous_contents() -> None:
    target = SizedBuffer.copy_of(b"old secret")
    old_backing = target.view()
    source = SizedBuffer.copy_of(b"new")

    target.move_from(source)

    assert target == b"new"
    assert source.length == 0
    assert bytes(old_backing) == bytes(len(old_backing))


def test_move_from_self_is_a_no_op() -> None:
    buffer = SizedBuffer.copy_of(b"keep")
    buffer.move_from(buffer)

    assert buffer == b"keep"


def test_release_zero_fills_before_dropping() -> None:
    buffer = SizedBuffer.copy_of(b"top secret")
    backing = buffer.view()

    buffer.release()
    buffer.release()

    assert buffer.length == 0
    assert bytes(backing) == bytes(10)


def test_context_manager_releases_on_error() -> None:
    backing = None
    with pytest.raises(RuntimeError):
        with SizedBuffer.copy_of(b"abc") as buffer:
            backing = buffer.view()
            raise RuntimeError("boom")

    assert backing is not None
    assert bytes(backing) == b"\x00\x00\x00"


def test_garbage_collection_wipes_unreleased_storage() -> None:
    buffer = SizedBuffer.copy_of(b"forgotten")
    backing = buffer.view()

    del buffer
    gc.collect()

    assert bytes(backing) == bytes(9)


def test_moved_storage_survives_collection_of_source() -> None:
    source = SizedBuffer.copy_of(b"handle")
    moved = source.take()

    del source
    gc.collect()

    assert moved == b"handle"


def test_equality_against_buffers_and_bytes() -> None:
    buffer = SizedBuffer.copy_of(b"abc")

    assert buffer == SizedBuffer.copy_of(b"abc")
    assert buffer == bytearray(b"abc")
    assert buffer != b"abd"
    assert buffer != b"ab"
    assert SizedBuffer() == b""
    assert (buffer == 3) is False


def test_repr_hides_contents() -> None:
    assert repr(SizedBuffer.copy_of(b"hunter2")) == "SizedBuffer(length=7)"


def test_implicit_copies_are_refused() -> None:
    buffer = SizedBuffer.copy_of(b"abc")

    with pytest.raises(TypeError):
        copy.copy(buffer)
    with pytest.raises(TypeError):
        copy.deepcopy(buffer)
    with pytest.raises(TypeError):
        pickle.dumps(buffer)


def test_secure_zero_clears_bytearray_and_memoryview() -> None:
    data = bytearray(b"sensitive")
    secure_zero(data)
    assert data == bytearray(9)

    other = bytearray(b"abcdef")
    secure_zero(memoryview(other)[2:4])
    assert other == bytearray(b"ab\x00\x00ef")


def test_secure_zero_rejects_immutable_buffers() -> None:
    with pytest.raises(TypeError):
        secure_zero(memoryview(b"immutable"))
    with pytest.raises(TypeError):
        secure_zero(b"immutable")  # type: ignore[arg-type]
