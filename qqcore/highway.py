"""Highway upload framing, server addresses and session connection pool."""

from __future__ import annotations

import ipaddress
import struct
import threading
from dataclasses import dataclass, field
from typing import Any

_STX = b"\x28"
_ETX = b"\x29"

REQ_CMD_DATA = "PicUp.DataUp"
REQ_CMD_HEART_BREAK = "PicUp.Echo"
HIGHWAY_MAX_RESPONSE_SIZE = 1024 * 100
MAX_IDLE_CONN = 7


def frame(head: bytes, body: bytes | None) -> bytes:
    """Wrap a head and body as STX, both lengths, head, body and ETX."""
    body = body or b""
    return _STX + struct.pack(">II", len(head), len(body)) + head + body + _ETX


@dataclass(frozen=True)
class Addr:
    """Highway server address with a packed IPv4 value."""

    ip: int
    port: int

    def as_ip(self) -> ipaddress.IPv4Address:
        """Return the address reading ``ip`` most significant byte first."""
        return ipaddress.IPv4Address(self.ip & 0xFFFFFFFF)

    def __str__(self) -> str:
        octets = (self.ip & 0xFFFFFFFF).to_bytes(4, "little")
        return f"{'.'.join(str(o) for o in octets)}:{self.port}"

    def is_empty(self) -> bool:
        return self.ip == 0 or self.port == 0


@dataclass
class PersistConn:
    """A pooled connection, its server and its last echo delay in ms."""

    conn: Any
    addr: Addr
    ping: int = 0


@dataclass
class Session:
    """Highway upload session: credentials, servers and idle connections."""

    uin: str = ""
    app_id: int = 0
    sig_session: bytes = b""
    session_key: bytes = b""
    sso_addr: list[Addr] = field(default_factory=list)
    _seq: int = field(default=0, init=False, repr=False)
    _idx: int = field(default=0, init=False, repr=False)
    _idle: list[PersistConn] = field(default_factory=list, init=False, repr=False)
    _seq_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _addr_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _idle_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def addr_length(self) -> int:
        with self._addr_lock:
            return len(self.sso_addr)

    def append_addr(self, ip: int, port: int) -> None:
        with self._addr_lock:
            self.sso_addr.append(Addr(ip=ip, port=int(port)))

    def next_addr(self) -> Addr:
        """Return servers in round-robin order."""
        with self._addr_lock:
            if not self.sso_addr:
                raise IndexError("no highway server address")
            addr = self.sso_addr[self._idx % len(self.sso_addr)]
            self._idx = (self._idx + 1) % len(self.sso_addr)
            return addr

    def next_seq(self) -> int:
        with self._seq_lock:
            self._seq += 2
            return self._seq

    def get_idle_conn(self) -> PersistConn | None:
        """Take the fastest idle connection, or None when the pool is empty."""
        with self._idle_lock:
            if not self._idle:
                return None
            return self._idle.pop(0)

    def put_idle_conn(self, conn: PersistConn) -> None:
        """Return a connection to the pool, kept sorted by delay.

        The slowest connection is dropped when the pool exceeds its limit.
        """
        if conn.conn is None or conn.addr.is_empty():
            raise ValueError("put bad idle conn")
        with self._idle_lock:
            index = next(
                (i for i, item in enumerate(self._idle) if item.ping >= conn.ping),
                len(self._idle),
            )
            self._idle.insert(index, conn)
            if len(self._idle) > MAX_IDLE_CONN:
                self._idle.pop()