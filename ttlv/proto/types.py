"""Wire-level type codes and layout constants for TTLV items."""

from enum import IntEnum

HEADER_SIZE = 8
ALIGNMENT = 8

MAX_TAG_CODE = (1 << 24) - 1
MAX_LENGTH = (1 << 32) - 1


class ItemType(IntEnum):
    """The one-byte type code that selects a value variant."""

    STRUCTURE = 0x01
    INTEGER = 0x02
    LONG_INTEGER = 0x03
    BIG_INTEGER = 0x04
    ENUMERATION = 0x05
    BOOLEAN = 0x06
    TEXT_STRING = 0x07
    BYTE_STRING = 0x08
    DATE_TIME = 0x09
    INTERVAL = 0x0A


# Exact unpadded value length for each fixed-width type
FIXED_LENGTHS: dict[ItemType, int] = {
    ItemType.INTEGER: 4,
    ItemType.ENUMERATION: 4,
    ItemType.INTERVAL: 4,
    ItemType.LONG_INTEGER: 8,
    ItemType.BOOLEAN: 8,
    ItemType.DATE_TIME: 8,
}

# struct format for each fixed-width type (big-endian)
FORMAT_CHARS: dict[ItemType, str] = {
    ItemType.INTEGER: ">i",
    ItemType.ENUMERATION: ">I",
    ItemType.INTERVAL: ">I",
    ItemType.LONG_INTEGER: ">q",
    ItemType.BOOLEAN: ">Q",
    ItemType.DATE_TIME: ">q",
}

_TYPE_CODES = frozenset(int(t) for t in ItemType)


def padded_length(length: int) -> int:
    """Round a value length up to the next multiple of the alignment."""
    return (length + ALIGNMENT - 1) // ALIGNMENT * ALIGNMENT


def is_type_code(code: int) -> bool:
    return code in _TYPE_CODES
