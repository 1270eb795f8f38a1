import hashlib
import struct

import pytest

from qqcore.pow import calc_pow


def _challenge(a, typ, c, ok, e, f, src, tgt, cpy):
    out = bytes((a, typ, c, ok)) + struct.pack(">HH", e, f)
    for part in (src, tgt, cpy):
        out += struct.pack(">H", len(part)) + part
    return out


def test_non_solvable_challenge_is_echoed():
    data = _challenge(1, 1, 3, 0, 7, 9, b"src", b"tgt", b"cpy")
    assert calc_pow(data) == data


def test_short_target_is_not_solved():
    data = _challenge(1, 2, 3, 0, 7, 9, b"\x01", b"\x00" * 31, b"")
    assert calc_pow(data) == data


def test_ok_flag_without_solving_appends_empty_answer():
    data = _challenge(1, 1, 3, 1, 7, 9, b"ab", b"cd", b"ef")
    out = calc_pow(data)
    assert out[: len(data)] == data
    assert out[len(data):] == b"\x00\x00" + b"\x00" * 8


def test_type_two_challenge_is_solved():
    src = b"\x01\x00"
    answer = (int.from_bytes(src, "big") + 5).to_bytes(2, "big")
    tgt = hashlib.sha256(answer).digest()
    data = _challenge(4, 2, 6, 0, 1, 2, src, tgt, b"copy")
    out = calc_pow(data)

    expected_head = bytearray(data)
    expected_head[3] = 1
    assert out[: len(data)] == bytes(expected_head)
    rest = out[len(data):]
    (dst_len,) = struct.unpack(">H", rest[:2])
    dst = rest[2 : 2 + dst_len]
    assert dst == answer
    assert hashlib.sha256(dst).digest() == tgt
    _elapsed, count = struct.unpack(">II", rest[2 + dst_len :])
    assert count == 5


def test_truncated_challenge_raises():
    data = _challenge(1, 1, 3, 0, 7, 9, b"src", b"tgt", b"cpy")
    with pytest.raises(ValueError):
        calc_pow(data[:-2])