"""Serialization of items into TTLV bytes.

Every item is written as a 3-byte tag code, a 1-byte type code and a
4-byte value length, all big-endian, followed by the value padded with
zero bytes to a multiple of 8. The length field excludes the padding.
"""

import struct
from typing import Any

from .errors import BufferTooSmall, EncodeError, TagConversionFailed
from .tags import RAW_TAGS, TagMap, UnknownTag, is_tag_code
from .types import FIXED_LENGTHS, FORMAT_CHARS, HEADER_SIZE, MAX_LENGTH, padded_length
from .values import BigInteger, ByteString, Item, Structure, TextString, Value

# Tag code and type code share the first word: (code << 8) | type
_HEADER = struct.Struct(">II")


def big_integer_bytes(value: int, size: int | None = None) -> bytes:
    """Two's complement big-endian bytes, sign-extended to a multiple of 8.

    ``size`` widens the result to that many bytes when the value fits;
    otherwise the minimal width is used.
    """
    magnitude = value if value >= 0 else ~value
    minimal = padded_length(magnitude.bit_length() // 8 + 1)
    size = size if size is not None and size >= minimal else minimal
    return value.to_bytes(size, byteorder="big", signed=True)


def _tag_code(tag: Any, tags: TagMap) -> int:
    if isinstance(tag, UnknownTag):
        return tag.code

    code = tags.code_of(tag)
    if code is None:
        raise TagConversionFailed(f"{tags!r} has no wire code for tag {tag!r}")
    if not is_tag_code(code):
        raise TagConversionFailed(f"Wire code for tag {tag!r} is not a 24-bit value: {code!r}")
    return code


def _payload(value: Value) -> bytes | memoryview:
    """Raw bytes of a variable-length value."""
    if isinstance(value, TextString):
        try:
            return value.value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodeError(f"TextString is not encodable as UTF-8: {exc.reason}") from exc
    if isinstance(value, ByteString):
        return memoryview(value.value).cast("B")
    if isinstance(value, BigInteger):
        return big_integer_bytes(value.value, value.size)
    raise EncodeError(f"Unsupported value type: {type(value).__name__}")


def _value_length(value: Value, tags: TagMap | None) -> int:
    if isinstance(value, Structure):
        return sum(_measure(child, tags) for child in value.items)
    if value.item_type in FIXED_LENGTHS:
        return FIXED_LENGTHS[value.item_type]
    return len(_payload(value))


def _measure(item: Item, tags: TagMap | None) -> int:
    if tags is not None:
        _tag_code(item.tag, tags)

    length = _value_length(item.value, tags)
    if length > MAX_LENGTH:
        raise EncodeError(f"Value of {item.tag!r} is {length} bytes, over the 32-bit length limit")
    return HEADER_SIZE + padded_length(length)


def encoded_length(item: Item) -> int:
    """Total number of bytes ``item`` occupies on the wire, padding included."""
    return _measure(item, None)


def _write(item: Item, buf: memoryview, offset: int, tags: TagMap) -> int:
    code = _tag_code(item.tag, tags)
    value = item.value
    start = offset + HEADER_SIZE

    if isinstance(value, Structure):
        cursor = start
        for child in value.items:
            cursor += _write(child, buf, cursor, tags)
        length = cursor - start
    elif value.item_type in FORMAT_CHARS:
        # Boolean goes out as an 8-byte 0 or 1
        raw = int(value.value)  # type: ignore[attr-defined]
        struct.pack_into(FORMAT_CHARS[value.item_type], buf, start, raw)
        length = FIXED_LENGTHS[value.item_type]
    else:
        payload = _payload(value)
        length = len(payload)
        buf[start : start + length] = payload

    padded = padded_length(length)
    buf[start + length : start + padded] = bytes(padded - length)
    _HEADER.pack_into(buf, offset, (code << 8) | value.item_type, length)
    return HEADER_SIZE + padded


def encode(item: Item, buffer: Any, tags: TagMap = RAW_TAGS, offset: int = 0) -> int:
    """Encode one item into a writable buffer.

    Args:
        item: The item to encode, including any nested children.
        buffer: A writable buffer (bytearray, writable memoryview, ...).
        tags: Maps the item's tags to wire codes.
        offset: Position in ``buffer`` to start writing at.

    Returns:
        The number of bytes written.

    Raises:
        BufferTooSmall: If the item does not fit. Nothing is written.
        TagConversionFailed: If a tag has no valid wire code. Nothing is written.
    """
    view = memoryview(buffer)
    if view.readonly:
        raise TypeError("encode() requires a writable buffer")
    view = view.cast("B") if view.format != "B" or view.ndim != 1 else view

    if offset < 0:
        raise ValueError(f"offset must not be negative, got {offset}")

    size = _measure(item, tags)
    available = len(view) - offset
    if size > available:
        raise BufferTooSmall(f"Encoding needs {size} bytes, buffer has {max(available, 0)}")

    return _write(item, view, offset, tags)


def encode_bytes(item: Item, tags: TagMap = RAW_TAGS) -> bytes:
    """Encode one item into a new, exactly sized bytes object."""
    buf = bytearray(_measure(item, tags))
    _write(item, memoryview(buf), 0, tags)
    return bytes(buf)
