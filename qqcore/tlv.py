"""Configurable tag-length-value record decoder."""

from __future__ import annotations

from dataclasses import dataclass

_VALID_SIZES = (1, 2, 4)


@dataclass(frozen=True)
class Record:
    """One tag-length-value record."""

    tag: int
    length: int
    value: bytes


class MessageTooShortError(ValueError):
    """The data ends before a complete record."""

    def __init__(self) -> None:
        super().__init__("tlv: message too short")


class Decoder:
    """Decoder for records with fixed-width big-endian tag and length fields."""

    def __init__(self, tag_size: int, len_size: int) -> None:
        if tag_size not in _VALID_SIZES:
            raise ValueError("invalid tag size")
        if len_size not in _VALID_SIZES:
            raise ValueError("invalid len size")
        self.tag_size = tag_size
        self.len_size = len_size
        self.head_size = tag_size + len_size

    def _decode_record(self, data: bytes, offset: int) -> Record:
        if len(data) - offset < self.head_size:
            raise MessageTooShortError()
        tag = int.from_bytes(data[offset : offset + self.tag_size], "big")
        len_start = offset + self.tag_size
        length = int.from_bytes(data[len_start : len_start + self.len_size], "big")
        start = offset + self.head_size
        if len(data) - start < length:
            raise MessageTooShortError()
        return Record(tag=tag, length=length, value=bytes(data[start : start + length]))

    def decode(self, data: bytes) -> list[Record]:
        """Decode every record in ``data``."""
        records = []
        offset = 0
        while offset < len(data):
            record = self._decode_record(data, offset)
            records.append(record)
            offset += self.head_size + record.length
        return records

    def decode_record_map(self, data: bytes) -> dict[int, bytes]:
        """Decode ``data`` into a tag-to-value mapping; later tags win."""
        return {record.tag: record.value for record in self.decode(data)}