"""Message inspection utility for keyguard developers.

Decodes a hex-encoded message as one of the four message kinds and prints
its envelope plus, for each payload field, the length. Handles and tokens
also get a short SHA-256 fingerprint so two dumps can be compared; password
fields only ever show their length. Field contents are never printed.

    python -m keyguard.tools.message_debug verify-request 00000000d10f0000...
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from collections.abc import Sequence

import msgspec

from keyguard.protocol.buffer import SizedBuffer
from keyguard.protocol.messages import MESSAGE_TYPES
from keyguard.protocol.protocol import Status

FINGERPRINT_HEX_DIGITS = 16

# Reported by length only, never hashed.
LENGTH_ONLY_FIELDS = frozenset({"provided_password"})


class FieldSnapshot(msgspec.Struct, frozen=True):
    name: str
    length: int
    fingerprint: str | None = None


class MessageDebugSnapshot(msgspec.Struct, frozen=True):
    kind: str
    raw_length: int
    status: str
    user_id: int | None = None
    fields: tuple[FieldSnapshot, ...] = ()

    def render(self) -> str:
        lines = [
            "[MessageDebug] --- Snapshot ---",
            f"kind={self.kind}",
            f"raw_len={self.raw_length}",
            f"status={self.status}",
        ]
        if self.user_id is not None:
            lines.append(f"user_id={self.user_id}")
        for field in self.fields:
            line = f"{field.name}: len={field.length}"
            if field.fingerprint is not None:
                line += f" sha256={field.fingerprint}"
            lines.append(line)
        return "\n".join(lines)


def _parse_hex(hex_string: str) -> bytes:
    compact = "".join(hex_string.split())
    if compact.startswith("0x") or compact.startswith("0X"):
        compact = compact[2:]
    if len(compact) % 2:
        raise ValueError("message hex must contain an even number of digits")
    try:
        return bytes.fromhex(compact)
    except ValueError as exc:
        raise ValueError(f"Invalid message hex '{hex_string}': {exc}") from exc


def _field_snapshot(name: str, buffer: SizedBuffer) -> FieldSnapshot:
    if name in LENGTH_ONLY_FIELDS:
        return FieldSnapshot(name=name, length=buffer.length)
    digest = hashlib.sha256(buffer.view()).hexdigest()[:FINGERPRINT_HEX_DIGITS]
    return FieldSnapshot(name=name, length=buffer.length, fingerprint=digest)


def build_snapshot(kind: str, raw: bytes) -> MessageDebugSnapshot:
    try:
        message_type = MESSAGE_TYPES[kind]
    except KeyError as exc:
        raise ValueError(f"Unknown message kind '{kind}'. Choose from: {', '.join(MESSAGE_TYPES)}") from exc

    with message_type() as message:
        status = message.deserialize(raw)
        if status != Status.OK:
            return MessageDebugSnapshot(kind=kind, raw_length=len(raw), status=status.name)

        fields = tuple(_field_snapshot(name, getattr(message, name)) for name in message.field_names())
        return MessageDebugSnapshot(
            kind=kind,
            raw_length=len(raw),
            status=status.name,
            user_id=message.user_id,
            fields=fields,
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Decode and summarise a keyguard message.")
    parser.add_argument("kind", choices=sorted(MESSAGE_TYPES), help="Message kind to decode as")
    parser.add_argument("hex", help="Serialized message as hex (whitespace allowed)")
    parser.add_argument("--json", action="store_true", help="Emit the snapshot as JSON")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        raw = _parse_hex(args.hex)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    snapshot = build_snapshot(args.kind, raw)
    if args.json:
        print(msgspec.json.encode(snapshot).decode("utf-8"))
    else:
        print(snapshot.render())
    return 0 if snapshot.status == Status.OK.name else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
