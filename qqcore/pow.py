"""Proof-of-work challenge solver used during login."""

from __future__ import annotations

import hashlib
import struct
import time

_UINT32_MASK = 0xFFFFFFFF


class _Reader:
    """Sequential big-endian reader over a byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise ValueError("pow data too short")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def byte(self) -> int:
        return self.take(1)[0]

    def uint16(self) -> int:
        return struct.unpack(">H", self.take(2))[0]

    def bytes_short(self) -> bytes:
        return self.take(self.uint16())


def _int_bytes(value: int) -> bytes:
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def _bytes_short(part: bytes) -> bytes:
    return struct.pack(">H", len(part)) + part


def calc_pow(data: bytes) -> bytes:
    """Solve a SHA-256 proof-of-work challenge and return the answer block.

    For challenge type 2 with a 32-byte target, the source number is
    incremented until its SHA-256 digest equals the target; the answer,
    elapsed milliseconds and iteration count are appended to the echoed
    challenge.
    """
    reader = _Reader(data)
    a = reader.byte()
    typ = reader.byte()
    c = reader.byte()
    ok = reader.byte() != 0
    e = reader.uint16()
    f = reader.uint16()
    src = reader.bytes_short()
    tgt = reader.bytes_short()
    cpy = reader.bytes_short()

    dst = b""
    elapsed = 0
    count = 0
    if typ == 2 and len(tgt) == 32:
        start = time.monotonic()
        value = int.from_bytes(src, "big")
        while hashlib.sha256(_int_bytes(value)).digest() != tgt:
            value += 1
            count += 1
        ok = True
        dst = _int_bytes(value)
        elapsed = int((time.monotonic() - start) * 1000)

    out = bytearray((a, typ, c, 1 if ok else 0))
    out += struct.pack(">HH", e, f)
    out += _bytes_short(src)
    out += _bytes_short(tgt)
    out += _bytes_short(cpy)
    if ok:
        out += _bytes_short(dst)
        out += struct.pack(">II", elapsed & _UINT32_MASK, count & _UINT32_MASK)
    return bytes(out)