"""Transport codec for request and publish payloads.

Payloads travel as MessagePack. The msgspec encoder and decoder are created
once and reused; both are safe to share between threads.
"""

from __future__ import annotations

from typing import Any

import msgspec

from .base import TransportError


_encoder = msgspec.msgpack.Encoder()
_decoder = msgspec.msgpack.Decoder()


class CodecError(TransportError):
    """A payload could not be encoded or decoded."""


def encode(value: Any) -> bytes:
    """Return the MessagePack encoding of *value*."""

    try:
        return _encoder.encode(value)
    except (TypeError, msgspec.EncodeError) as exc:
        raise CodecError(f"cannot encode payload: {exc}") from exc


def decode(data: bytes) -> Any:
    """Return the Python value encoded in *data*. An empty frame is None."""

    if data in (b"", None):
        return None

    try:
        return _decoder.decode(data)
    except msgspec.DecodeError as exc:
        raise CodecError(f"cannot decode payload: {exc}") from exc
