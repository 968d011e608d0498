"""Unsigned LEB128: 7 payload bits per byte, high bit set on all but the last byte."""
from __future__ import annotations
from typing import Iterable, List


def encode_varint(value: int) -> bytes:
    value = int(value)
    if value < 0:
        raise ValueError(f"varint value must be non-negative, got {value}")
    out = bytearray()
    while True:
        b = value & 0x7F
        value >>= 7
        if value:
            out.append(b | 0x80)
        else:
            out.append(b)
            return bytes(out)


def encode_varints(values: Iterable[int]) -> bytes:
    buf = bytearray()
    for v in values:
        buf += encode_varint(v)
    return bytes(buf)


def decode_varints(data: Iterable[int]) -> List[int]:
    """Accepts bytes or signed byte values (an NBT ByteArray)."""
    out: List[int] = []
    value = 0
    shift = 0
    for raw in data:
        b = int(raw) & 0xFF
        value |= (b & 0x7F) << shift
        if b & 0x80:
            shift += 7
        else:
            out.append(value)
            value = 0
            shift = 0
    if shift:
        raise ValueError("Truncated varint at end of data")
    return out
