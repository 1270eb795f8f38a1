import socket
import struct
import threading
import time

import pytest

from qqcore.network import (
    ConnectionClosedError,
    Packet,
    RequestParams,
    TCPClient,
)


@pytest.fixture
def listener():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    sock.settimeout(5)
    yield sock
    sock.close()


def _addr(listener):
    return f"127.0.0.1:{listener.getsockname()[1]}"


def _recv_exact(sock, size):
    buf = b""
    while len(buf) < size:
        chunk = sock.recv(size - len(buf))
        assert chunk
        buf += chunk
    return buf


def test_write_and_read_roundtrip(listener):
    client = TCPClient()
    client.connect(_addr(listener))
    peer, _ = listener.accept()
    try:
        client.write(b"hello")
        assert _recv_exact(peer, 5) == b"hello"
        peer.sendall(struct.pack(">i", -5) + b"abc")
        assert client.read_int32() == -5
        assert client.read_bytes(3) == b"abc"
    finally:
        peer.close()
        client.close()


def test_write_without_connection_raises():
    with pytest.raises(ConnectionClosedError):
        TCPClient().write(b"x")


def test_read_without_connection_raises():
    with pytest.raises(ConnectionClosedError):
        TCPClient().read_int32()


def test_dial_failure_raises(listener):
    addr = _addr(listener)
    listener.close()
    with pytest.raises(ConnectionError):
        TCPClient().connect(addr)


def test_peer_close_triggers_unexpected_disconnect(listener):
    client = TCPClient()
    fired = threading.Event()
    errors = []

    def on_drop(tcp, err):
        errors.append((tcp, err))
        fired.set()

    client.on_unexpected_disconnect(on_drop)
    client.connect(_addr(listener))
    peer, _ = listener.accept()
    peer.close()
    with pytest.raises(ConnectionClosedError):
        client.read_bytes(1)
    assert fired.wait(2)
    assert errors[0][0] is client
    with pytest.raises(ConnectionClosedError):
        client.write(b"x")


def test_close_triggers_planned_disconnect_once(listener):
    client = TCPClient()
    fired = threading.Event()
    calls = []

    def on_close(tcp):
        calls.append(tcp)
        fired.set()

    client.on_planned_disconnect(on_close)
    client.connect(_addr(listener))
    peer, _ = listener.accept()
    client.close()
    client.close()
    assert fired.wait(2)
    time.sleep(0.05)
    peer.close()
    assert calls == [client]


def test_request_params_bool():
    params = RequestParams(used_large_size=True)
    assert params.get_bool("used_large_size") is True
    assert params.get_bool("missing") is False


def test_request_params_int32():
    params = RequestParams(count=7)
    assert params.get_int32("count") == 7
    assert params.get_int32("missing") == 0


def test_request_params_wrong_type_raises():
    params = RequestParams(flag="yes", count=True)
    with pytest.raises(TypeError):
        params.get_bool("flag")
    with pytest.raises(TypeError):
        params.get_int32("count")


def test_packet_defaults_to_empty_params():
    packet = Packet(sequence_id=3, command_name="cmd", payload=b"p")
    assert packet.params.get_bool("anything") is False
    assert packet.params == {}