"""TCP client with disconnect callbacks and packet/request types."""

from __future__ import annotations

import socket
import struct
import threading
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable


class ConnectionClosedError(ConnectionError):
    """The connection is not open or was dropped."""

    def __init__(self, message: str = "connection closed") -> None:
        super().__init__(message)


def _split_addr(addr: str | tuple[str, int]) -> tuple[str, int]:
    if isinstance(addr, tuple):
        return addr[0], int(addr[1])
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"address {addr!r} has no port")
    return host.strip("[]"), int(port)


class TCPClient:
    """Blocking TCP connection reporting planned and unexpected disconnects."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._sock: socket.socket | None = None
        self._connected = False
        self._planned: Callable[[TCPClient], None] | None = None
        self._unexpected: Callable[[TCPClient, BaseException], None] | None = None

    def on_planned_disconnect(self, callback: Callable[[TCPClient], None]) -> None:
        """Register the callback run after ``close`` or a reconnect."""
        with self._lock:
            self._planned = callback

    def on_unexpected_disconnect(
        self, callback: Callable[[TCPClient, BaseException], None]
    ) -> None:
        """Register the callback run when reading or writing fails."""
        with self._lock:
            self._unexpected = callback

    def connect(self, addr: str | tuple[str, int]) -> None:
        self.close()
        host, port = _split_addr(addr)
        try:
            sock = socket.create_connection((host, port))
        except OSError as exc:
            raise ConnectionError(f"dial tcp error: {exc}") from exc
        with self._lock:
            self._sock = sock
            self._connected = True

    def _get_sock(self) -> socket.socket:
        with self._lock:
            sock = self._sock
        if sock is None:
            raise ConnectionClosedError()
        return sock

    def write(self, data: bytes) -> None:
        sock = self._get_sock()
        try:
            sock.sendall(data)
        except OSError as exc:
            self._unexpected_close(exc)
            raise ConnectionClosedError() from exc

    def read_bytes(self, length: int) -> bytes:
        """Read exactly ``length`` bytes."""
        sock = self._get_sock()
        buf = bytearray()
        try:
            while len(buf) < length:
                chunk = sock.recv(length - len(buf))
                if not chunk:
                    raise EOFError("unexpected EOF")
                buf += chunk
        except (OSError, EOFError) as exc:
            self._unexpected_close(exc)
            raise ConnectionClosedError() from exc
        return bytes(buf)

    def read_int32(self) -> int:
        """Read a signed big-endian 32-bit integer."""
        return struct.unpack(">i", self.read_bytes(4))[0]

    def close(self) -> None:
        self._close()
        with self._lock:
            if self._planned is not None and self._connected:
                threading.Thread(target=self._planned, args=(self,), daemon=True).start()
                self._connected = False

    def _unexpected_close(self, error: BaseException) -> None:
        self._close()
        with self._lock:
            if self._unexpected is not None and self._connected:
                threading.Thread(
                    target=self._unexpected, args=(self, error), daemon=True
                ).start()
                self._connected = False

    def _close(self) -> None:
        with self._lock:
            sock, self._sock = self._sock, None
        if sock is not None:
            try:
                sock.close()
            except OSError:
                pass


class RequestParams(dict):
    """Extra parameters carried from a request to its response decoder."""

    def get_bool(self, key: str) -> bool:
        if key not in self:
            return False
        value = self[key]
        if not isinstance(value, bool):
            raise TypeError(f"request param {key!r} is not a bool")
        return value

    def get_int32(self, key: str) -> int:
        if key not in self:
            return 0
        value = self[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"request param {key!r} is not an int")
        return value


@dataclass
class Packet:
    """A decoded incoming packet."""

    sequence_id: int = 0
    command_name: str = ""
    payload: bytes = b""
    params: RequestParams = field(default_factory=RequestParams)


class RequestType(IntEnum):
    LOGIN = 0x0A
    SIMPLE = 0x0B


class EncryptType(IntEnum):
    NO_ENCRYPT = 0x00
    D2_KEY = 0x01
    EMPTY_KEY = 0x02


@dataclass
class Request:
    """An outgoing SSO request."""

    type: RequestType = RequestType.SIMPLE
    encrypt_type: EncryptType = EncryptType.NO_ENCRYPT
    sequence_id: int = 0
    uin: int = 0
    command_name: str = ""
    body: bytes = b""
    extra: Any = None