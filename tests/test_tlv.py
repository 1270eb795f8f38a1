import pytest

from qqcore.tlv import Decoder, MessageTooShortError, Record


def test_decode_two_byte_fields():
    data = b"\x00\x01\x00\x02ab\x00\x03\x00\x00"
    assert Decoder(2, 2).decode(data) == [Record(1, 2, b"ab"), Record(3, 0, b"")]


def test_decode_mixed_field_sizes():
    data = b"\x07\x00\x00\x00\x03xyz"
    records = Decoder(1, 4).decode(data)
    assert records == [Record(7, 3, b"xyz")]


def test_decode_empty_input():
    assert Decoder(2, 2).decode(b"") == []


def test_short_header_raises():
    with pytest.raises(MessageTooShortError):
        Decoder(2, 2).decode(b"\x00\x01\x00")


def test_value_longer_than_data_raises():
    with pytest.raises(MessageTooShortError):
        Decoder(2, 2).decode(b"\x00\x01\x00\x05ab")


@pytest.mark.parametrize("sizes", [(3, 2), (2, 0), (8, 1)])
def test_invalid_sizes_rejected(sizes):
    with pytest.raises(ValueError):
        Decoder(*sizes)


def test_record_map_later_tag_wins():
    data = b"\x01\x01a\x02\x02bc\x01\x01z"
    assert Decoder(1, 1).decode_record_map(data) == {1: b"z", 2: b"bc"}


def test_record_lengths_cover_input():
    data = b"\x01\x01a\x02\x02bc\x03\x00"
    decoder = Decoder(1, 1)
    records = decoder.decode(data)
    assert sum(decoder.head_size + r.length for r in records) == len(data)
    assert all(len(r.value) == r.length for r in records)