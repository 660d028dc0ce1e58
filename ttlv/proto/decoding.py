"""Parsing of TTLV bytes into items.

Input is treated as untrusted. Every header field is checked against the
bytes actually available before it is used, so malformed data raises a
``DecodeError`` subclass rather than reading out of bounds.
"""

import logging
import struct
from collections.abc import Iterator
from typing import Any

from .errors import (
    BufferTooShort,
    DecodeError,
    InvalidLength,
    InvalidPadding,
    InvalidType,
    InvalidUtf8,
    InvalidValue,
    RecursionLimitExceeded,
)
from .options import DecodeOptions
from .tags import RAW_TAGS, TagMap, UnknownTag
from .types import (
    ALIGNMENT,
    FIXED_LENGTHS,
    FORMAT_CHARS,
    HEADER_SIZE,
    ItemType,
    is_type_code,
    padded_length,
)
from .values import (
    BigInteger,
    Boolean,
    ByteString,
    DateTime,
    Enumeration,
    Integer,
    Interval,
    Item,
    LongInteger,
    Structure,
    TextString,
    Value,
)

logger = logging.getLogger(__name__)

_HEADER = struct.Struct(">II")

_FIXED_VARIANTS: dict[ItemType, type[Value]] = {
    ItemType.INTEGER: Integer,
    ItemType.LONG_INTEGER: LongInteger,
    ItemType.ENUMERATION: Enumeration,
    ItemType.DATE_TIME: DateTime,
    ItemType.INTERVAL: Interval,
}

_DEFAULT_OPTIONS = DecodeOptions()


def _as_view(data: Any) -> memoryview:
    view = memoryview(data)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


class _Decoder:
    """Recursive-descent parser over one input buffer."""

    def __init__(self, view: memoryview, tags: TagMap, options: DecodeOptions) -> None:
        self.view = view
        self.tags = tags
        self.options = options

    def item(
        self, offset: int, end: int, depth: int, overrun: type[DecodeError]
    ) -> tuple[Item, int]:
        """Decode the item starting at ``offset`` without reading past ``end``.

        ``overrun`` is raised when the item does not fit before ``end``:
        BufferTooShort at the top level, InvalidLength inside a structure
        whose declared length is too small for its children.
        """
        remaining = end - offset
        if remaining < HEADER_SIZE:
            raise overrun(f"Need {HEADER_SIZE} header bytes, {remaining} remain", offset)

        word, length = _HEADER.unpack_from(self.view, offset)
        code, type_code = word >> 8, word & 0xFF

        if not is_type_code(type_code):
            raise InvalidType(f"Unknown type code 0x{type_code:02X}", offset)
        item_type = ItemType(type_code)

        self._check_length(item_type, length, offset)

        start = offset + HEADER_SIZE
        value_end = start + length
        padded_end = start + padded_length(length)
        if value_end > end:
            raise overrun(
                f"{item_type.name} value needs {length} bytes, {end - start} remain", offset
            )
        if padded_end > end:
            raise overrun(
                f"{item_type.name} padding needs {padded_end - value_end} bytes, "
                f"{end - value_end} remain",
                offset,
            )
        if self.options.strict_padding and any(self.view[value_end:padded_end]):
            raise InvalidPadding(f"Non-zero padding after {item_type.name} value", offset)

        if item_type is ItemType.STRUCTURE:
            value: Value = self._structure(start, value_end, depth, offset)
        else:
            value = self._scalar(item_type, start, value_end, offset)

        return Item(self._tag(code), value), padded_end - offset

    def _check_length(self, item_type: ItemType, length: int, offset: int) -> None:
        if item_type in FIXED_LENGTHS:
            if length != FIXED_LENGTHS[item_type]:
                raise InvalidLength(
                    f"{item_type.name} must be {FIXED_LENGTHS[item_type]} bytes, "
                    f"header says {length}",
                    offset,
                )
        elif item_type is ItemType.BIG_INTEGER:
            if length == 0 or length % ALIGNMENT:
                raise InvalidLength(
                    f"BIG_INTEGER length must be a positive multiple of {ALIGNMENT}, "
                    f"header says {length}",
                    offset,
                )
        elif item_type is ItemType.STRUCTURE:
            if length % ALIGNMENT:
                raise InvalidLength(
                    f"STRUCTURE length must be a multiple of {ALIGNMENT}, header says {length}",
                    offset,
                )

    def _tag(self, code: int) -> Any:
        tag = self.tags.tag_of(code)
        if tag is None:
            logger.debug("Keeping unrecognised tag code 0x%06X", code)
            return UnknownTag(code)
        return tag

    def _structure(self, start: int, end: int, depth: int, offset: int) -> Structure:
        if depth + 1 > self.options.max_depth:
            raise RecursionLimitExceeded(
                f"Structures nested deeper than {self.options.max_depth}", offset
            )

        children = []
        cursor = start
        while cursor < end:
            child, consumed = self.item(cursor, end, depth + 1, InvalidLength)
            children.append(child)
            cursor += consumed
        return Structure(tuple(children))

    def _scalar(self, item_type: ItemType, start: int, end: int, offset: int) -> Value:
        if item_type in _FIXED_VARIANTS:
            raw = struct.unpack_from(FORMAT_CHARS[item_type], self.view, start)[0]
            return _FIXED_VARIANTS[item_type](raw)

        if item_type is ItemType.BOOLEAN:
            raw = struct.unpack_from(FORMAT_CHARS[item_type], self.view, start)[0]
            if self.options.strict_padding and raw not in (0, 1):
                raise InvalidValue(f"BOOLEAN must be 0 or 1, got {raw}", offset)
            return Boolean(raw != 0)

        payload = self.view[start:end]

        if item_type is ItemType.TEXT_STRING:
            try:
                return TextString(payload.tobytes().decode("utf-8"))
            except UnicodeDecodeError as exc:
                raise InvalidUtf8(f"TEXT_STRING is not valid UTF-8: {exc.reason}", offset) from exc

        if item_type is ItemType.BYTE_STRING:
            if self.options.copy_payloads:
                return ByteString(payload.tobytes())
            return ByteString(payload.toreadonly())

        # BIG_INTEGER, the only type left
        return BigInteger(int.from_bytes(payload, byteorder="big", signed=True), len(payload))


def decode(
    data: Any,
    tags: TagMap = RAW_TAGS,
    options: DecodeOptions | None = None,
    *,
    offset: int = 0,
) -> tuple[Item, int]:
    """Decode one item from ``data``.

    Args:
        data: Bytes-like input (bytes, bytearray, memoryview).
        tags: Maps wire codes back to application tags.
        options: Decoder settings; defaults to lenient, copying, depth 32.
        offset: Position in ``data`` where the item starts.

    Returns:
        Tuple of (item, bytes_consumed). Bytes consumed includes the header
        and the value padding, so ``offset + bytes_consumed`` is where the
        next sibling item begins.

    Raises:
        DecodeError: A subclass describing the first problem found.
    """
    if options is None:
        options = _DEFAULT_OPTIONS
    view = _as_view(data)
    if offset < 0:
        raise ValueError(f"offset must not be negative, got {offset}")

    decoder = _Decoder(view, tags, options)
    try:
        return decoder.item(offset, len(view), 0, BufferTooShort)
    except DecodeError as exc:
        logger.debug("Rejected TTLV input: %s", exc)
        raise
    except RecursionError as exc:
        raise RecursionLimitExceeded(
            "Structures nested deeper than the interpreter allows", offset
        ) from exc


def iter_decode(
    data: Any,
    tags: TagMap = RAW_TAGS,
    options: DecodeOptions | None = None,
) -> Iterator[tuple[Item, int]]:
    """Yield (item, bytes_consumed) for consecutive items until ``data`` is exhausted."""
    view = _as_view(data)
    offset = 0
    while offset < len(view):
        item, consumed = decode(view, tags, options, offset=offset)
        yield item, consumed
        offset += consumed


def decode_all(
    data: Any,
    tags: TagMap = RAW_TAGS,
    options: DecodeOptions | None = None,
) -> list[Item]:
    """Decode every item in ``data``, which must hold only whole items."""
    return [item for item, _ in iter_decode(data, tags, options)]


def peek_length(data: Any) -> int:
    """Total encoded size of the item whose header starts ``data``.

    Only the 8-byte header is read, so a transport can use this to learn
    how many bytes make up the complete item before receiving them.

    Raises:
        BufferTooShort: If ``data`` holds fewer than 8 bytes.
    """
    view = _as_view(data)
    if len(view) < HEADER_SIZE:
        raise BufferTooShort(f"Need {HEADER_SIZE} header bytes, {len(view)} remain")
    _, length = _HEADER.unpack_from(view, 0)
    return HEADER_SIZE + padded_length(length)
