"""Wire format shared by the client and the server.

Every frame starts with a 4-byte operation code and a 4-byte payload size,
followed by the payload. A package payload is a run of size-prefixed values.
"""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass, field
from enum import IntEnum

_INT = struct.Struct("<i")


class OpCode(IntEnum):
    """Operation codes understood by the server."""

    MESSAGE = 0
    PACKAGE = 1


class ConnectionClosed(ConnectionError):
    """The peer closed the connection before a full frame arrived."""


def _frame(op_code: int, payload: bytes) -> bytes:
    return _INT.pack(op_code) + _INT.pack(len(payload)) + payload


@dataclass
class Package:
    """A batch of values sent together under one operation code."""

    op_code: OpCode = OpCode.PACKAGE
    buffer: bytearray = field(default_factory=bytearray)

    def add(self, value) -> None:
        """Append a bytes-like value, prefixed with its length."""
        data = memoryview(value).tobytes()
        self.buffer += _INT.pack(len(data))
        self.buffer += data

    def serialize(self) -> bytes:
        """Return the full frame: op code, payload size and payload."""
        return _frame(self.op_code, bytes(self.buffer))


def encode_message(text: str) -> bytes:
    """Build a MESSAGE frame carrying ``text`` as a NUL-terminated string."""
    return _frame(OpCode.MESSAGE, text.encode() + b"\0")


def _as_text(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode(errors="replace")


def decode_values(payload: bytes) -> list[str]:
    """Split a package payload into its string values."""
    values = []
    offset = 0
    while offset < len(payload):
        if offset + _INT.size > len(payload):
            raise ValueError("truncated size prefix in package payload")
        (size,) = _INT.unpack_from(payload, offset)
        offset += _INT.size
        if size < 0 or offset + size > len(payload):
            raise ValueError("value overruns package payload")
        values.append(_as_text(payload[offset:offset + size]))
        offset += size
    return values


def _recv_exact(sock: socket.socket, count: int) -> bytes:
    data = bytearray()
    while len(data) < count:
        chunk = sock.recv(count - len(data))
        if not chunk:
            raise ConnectionClosed("connection closed by peer")
        data += chunk
    return bytes(data)


def receive_operation(sock: socket.socket) -> int:
    """Read the next operation code; close the socket if the peer is gone."""
    try:
        raw = _recv_exact(sock, _INT.size)
    except ConnectionClosed:
        sock.close()
        raise
    (code,) = _INT.unpack(raw)
    return code


def receive_buffer(sock: socket.socket) -> bytes:
    """Read a size-prefixed payload."""
    (size,) = _INT.unpack(_recv_exact(sock, _INT.size))
    if size < 0:
        raise ValueError(f"negative payload size {size}")
    return _recv_exact(sock, size)