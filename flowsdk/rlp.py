"""Recursive Length Prefix (RLP) encoding and decoding."""

from __future__ import annotations

from typing import Any

__all__ = ["RLPError", "encode", "decode"]

_SHORT_LIMIT = 55
_STRING_OFFSET = 0x80
_LIST_OFFSET = 0xC0


class RLPError(ValueError):
    """Raised when a value cannot be encoded or bytes cannot be decoded."""


def _length_prefix(length: int, offset: int) -> bytes:
    if length <= _SHORT_LIMIT:
        return bytes([offset + length])
    length_bytes = length.to_bytes((length.bit_length() + 7) // 8, "big")
    return bytes([offset + _SHORT_LIMIT + len(length_bytes)]) + length_bytes


def _encode_bytes(data: bytes) -> bytes:
    if len(data) == 1 and data[0] < _STRING_OFFSET:
        return data
    return _length_prefix(len(data), _STRING_OFFSET) + data


def encode(item: Any) -> bytes:
    """Encode bytes, strings, non-negative integers and nested sequences of them."""
    if isinstance(item, (bytes, bytearray, memoryview)):
        return _encode_bytes(bytes(item))
    if isinstance(item, str):
        return _encode_bytes(item.encode("utf-8"))
    if isinstance(item, int):
        if item < 0:
            raise RLPError(f"cannot encode negative integer {item}")
        return _encode_bytes(item.to_bytes((item.bit_length() + 7) // 8, "big"))
    if isinstance(item, (list, tuple)):
        payload = b"".join(encode(element) for element in item)
        return _length_prefix(len(payload), _LIST_OFFSET) + payload
    if hasattr(type(item), "__bytes__"):
        return _encode_bytes(bytes(item))
    raise RLPError(f"cannot encode value of type {type(item).__name__}")


def _read_long_length(data: bytes, start: int, size: int, limit: int) -> int:
    if start + size > limit:
        raise RLPError("unexpected end of input while reading length")
    length_bytes = data[start : start + size]
    if length_bytes[0] == 0:
        raise RLPError("non-canonical length with leading zero bytes")
    length = int.from_bytes(length_bytes, "big")
    if length <= _SHORT_LIMIT:
        raise RLPError("non-canonical long-form length for short payload")
    return length


def _checked_end(start: int, length: int, limit: int) -> int:
    end = start + length
    if end > limit:
        raise RLPError("unexpected end of input")
    return end


def _decode_item(data: bytes, pos: int, limit: int) -> tuple[bytes | list, int]:
    if pos >= limit:
        raise RLPError("unexpected end of input")
    prefix = data[pos]

    if prefix < _STRING_OFFSET:
        return data[pos : pos + 1], pos + 1

    if prefix < _LIST_OFFSET:
        if prefix <= _STRING_OFFSET + _SHORT_LIMIT:
            length = prefix - _STRING_OFFSET
            start = pos + 1
        else:
            size = prefix - _STRING_OFFSET - _SHORT_LIMIT
            length = _read_long_length(data, pos + 1, size, limit)
            start = pos + 1 + size
        end = _checked_end(start, length, limit)
        payload = data[start:end]
        if length == 1 and payload[0] < _STRING_OFFSET:
            raise RLPError("non-canonical encoding of single byte")
        return payload, end

    if prefix <= _LIST_OFFSET + _SHORT_LIMIT:
        length = prefix - _LIST_OFFSET
        start = pos + 1
    else:
        size = prefix - _LIST_OFFSET - _SHORT_LIMIT
        length = _read_long_length(data, pos + 1, size, limit)
        start = pos + 1 + size
    end = _checked_end(start, length, limit)

    items: list = []
    cursor = start
    while cursor < end:
        element, cursor = _decode_item(data, cursor, end)
        items.append(element)
    return items, end


def decode(data: bytes) -> bytes | list:
    """Decode RLP bytes into bytes or nested lists of bytes."""
    data = bytes(data)
    item, end = _decode_item(data, 0, len(data))
    if end != len(data):
        raise RLPError("trailing bytes after RLP item")
    return item