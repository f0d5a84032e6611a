"""
Compact binary codec for record sequences.

Layout (big-endian, no padding):

    magic   2s      b"RB"
    count   uint32
    then per record:
        name    uint32 length + UTF-8 bytes
        age     int64
        email   uint32 length + UTF-8 bytes

A string length of 0xFFFFFFFF stands for None.
"""

from __future__ import annotations

import struct
from typing import List, Optional, Sequence, Tuple

from .errors import DecodeError
from .models import Record
from .rules import BINARY_MAGIC, TEXT_ENCODING

_HEADER = struct.Struct(">2sI")
_LENGTH = struct.Struct(">I")
_AGE = struct.Struct(">q")

_NONE_LENGTH = 0xFFFFFFFF


def _pack_str(value: Optional[str]) -> bytes:
    if value is None:
        return _LENGTH.pack(_NONE_LENGTH)
    raw = value.encode(TEXT_ENCODING)
    if len(raw) >= _NONE_LENGTH:
        raise ValueError(f"string field too long to encode: {len(raw)} bytes")
    return _LENGTH.pack(len(raw)) + raw


def _pack_age(age: int) -> bytes:
    try:
        return _AGE.pack(age)
    except struct.error:
        raise ValueError(f"age out of encodable range: {age}") from None


def encode_records(records: Sequence[Record]) -> bytes:
    """Encode records into a single self-describing byte buffer."""
    chunks = [_HEADER.pack(BINARY_MAGIC, len(records))]
    for r in records:
        chunks.append(_pack_str(r.name))
        chunks.append(_pack_age(r.age))
        chunks.append(_pack_str(r.email))
    return b"".join(chunks)


class _Reader:
    """Bounds-checked cursor over an encoded buffer."""

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def take(self, size: int, what: str) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise DecodeError(
                f"truncated input: need {size} bytes for {what} at offset {self.offset}, "
                f"have {len(self.data) - self.offset}"
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def unpack(self, fmt: struct.Struct, what: str) -> Tuple:
        return fmt.unpack(self.take(fmt.size, what))

    def read_str(self, what: str) -> Optional[str]:
        (length,) = self.unpack(_LENGTH, f"{what} length")
        if length == _NONE_LENGTH:
            return None
        raw = self.take(length, what)
        try:
            return raw.decode(TEXT_ENCODING)
        except UnicodeDecodeError as e:
            raise DecodeError(f"invalid {TEXT_ENCODING} in {what}: {e}") from e


def decode_records(data: bytes) -> List[Record]:
    """
    Decode a buffer produced by encode_records.

    Raises:
        DecodeError: if the buffer is truncated, corrupted, or foreign.
    """
    reader = _Reader(bytes(data))
    magic, count = reader.unpack(_HEADER, "header")
    if magic != BINARY_MAGIC:
        raise DecodeError(f"bad magic: {magic!r}")

    records: List[Record] = []
    for i in range(count):
        name = reader.read_str(f"record {i} name")
        (age,) = reader.unpack(_AGE, f"record {i} age")
        email = reader.read_str(f"record {i} email")
        records.append(Record(name=name, age=age, email=email))

    if reader.offset != len(reader.data):
        raise DecodeError(f"{len(reader.data) - reader.offset} trailing bytes after {count} records")
    return records
