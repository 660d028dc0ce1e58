"""The TTLV value model.

Each wire type has one frozen dataclass variant. An ``Item`` pairs a tag
with a value, and a ``Structure`` value owns an ordered tuple of child
items, so a message is a plain tree.

Example:
    message = Item(
        Tag.REQUEST_HEADER,
        Structure([Item(Tag.PROTOCOL_VERSION, Integer(6))]),
    )
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar

from .errors import NotAStructure
from .tags import describe_tag
from .types import ALIGNMENT, ItemType

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1
UINT32_MAX = 2**32 - 1

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_SECOND = timedelta(seconds=1)


def _check_int(variant: str, value: Any, low: int | None = None, high: int | None = None) -> None:
    # bool is an int subclass; True must not silently become Integer(1)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{variant} requires an int, got {type(value).__name__}")
    if low is not None and high is not None and not low <= value <= high:
        raise ValueError(f"{variant} value {value} outside [{low}, {high}]")


class Value:
    """Base class for value variants."""

    __slots__ = ()

    item_type: ClassVar[ItemType]


@dataclass(frozen=True, slots=True)
class Structure(Value):
    """An ordered sequence of child items. Order is significant."""

    item_type: ClassVar[ItemType] = ItemType.STRUCTURE

    items: tuple["Item", ...] = ()

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for child in items:
            if not isinstance(child, Item):
                raise TypeError(f"Structure children must be Items, got {type(child).__name__}")
        object.__setattr__(self, "items", items)

    def __iter__(self) -> Iterator["Item"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class Integer(Value):
    item_type: ClassVar[ItemType] = ItemType.INTEGER

    value: int

    def __post_init__(self) -> None:
        _check_int("Integer", self.value, INT32_MIN, INT32_MAX)


@dataclass(frozen=True, slots=True)
class LongInteger(Value):
    item_type: ClassVar[ItemType] = ItemType.LONG_INTEGER

    value: int

    def __post_init__(self) -> None:
        _check_int("LongInteger", self.value, INT64_MIN, INT64_MAX)


@dataclass(frozen=True, slots=True)
class BigInteger(Value):
    """An arbitrary-precision signed integer.

    ``size`` is the wire width in bytes, a positive multiple of 8. The
    decoder records it so re-encoding keeps any extra sign-extension
    words; the encoder falls back to the minimal width when it is None or
    too small for ``value``. It takes no part in equality or hashing.
    """

    item_type: ClassVar[ItemType] = ItemType.BIG_INTEGER

    value: int
    size: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        _check_int("BigInteger", self.value)
        if self.size is not None:
            _check_int("BigInteger size", self.size)
            if self.size <= 0 or self.size % ALIGNMENT:
                raise ValueError(
                    f"BigInteger size must be a positive multiple of {ALIGNMENT}, got {self.size}"
                )


@dataclass(frozen=True, slots=True)
class Enumeration(Value):
    item_type: ClassVar[ItemType] = ItemType.ENUMERATION

    value: int

    def __post_init__(self) -> None:
        _check_int("Enumeration", self.value, 0, UINT32_MAX)


@dataclass(frozen=True, slots=True)
class Boolean(Value):
    item_type: ClassVar[ItemType] = ItemType.BOOLEAN

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"Boolean requires a bool, got {type(self.value).__name__}")


@dataclass(frozen=True, slots=True)
class TextString(Value):
    item_type: ClassVar[ItemType] = ItemType.TEXT_STRING

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"TextString requires a str, got {type(self.value).__name__}")


@dataclass(frozen=True, slots=True)
class ByteString(Value):
    """Raw bytes.

    Decoding with ``copy_payloads=False`` stores a read-only memoryview into
    the input buffer instead of a copy. Such a value is only valid while
    that buffer is alive and unchanged.

    Hashing it hashes the underlying buffer, so a value borrowed from a
    bytearray raises TypeError on ``hash()``. It still compares equal to
    an owned copy.
    """

    item_type: ClassVar[ItemType] = ItemType.BYTE_STRING

    value: bytes | memoryview

    def __post_init__(self) -> None:
        if isinstance(self.value, bytearray):
            object.__setattr__(self, "value", bytes(self.value))
        elif not isinstance(self.value, (bytes, memoryview)):
            raise TypeError(f"ByteString requires bytes, got {type(self.value).__name__}")


@dataclass(frozen=True, slots=True)
class DateTime(Value):
    """Seconds since the POSIX epoch."""

    item_type: ClassVar[ItemType] = ItemType.DATE_TIME

    value: int

    def __post_init__(self) -> None:
        _check_int("DateTime", self.value, INT64_MIN, INT64_MAX)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "DateTime":
        """Build from a datetime. Naive datetimes are taken as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return cls((dt - EPOCH) // _SECOND)


@dataclass(frozen=True, slots=True)
class Interval(Value):
    """A duration in whole seconds."""

    item_type: ClassVar[ItemType] = ItemType.INTERVAL

    value: int

    def __post_init__(self) -> None:
        _check_int("Interval", self.value, 0, UINT32_MAX)

    @classmethod
    def from_timedelta(cls, td: timedelta) -> "Interval":
        return cls(td // _SECOND)


@dataclass(frozen=True, slots=True)
class Item:
    """A tag paired with a value; the unit the encoder and decoder work on.

    ``tag`` is whatever the caller's tag map produces, or an ``UnknownTag``
    for codes the map did not recognise while decoding.
    """

    tag: Any
    value: Value

    def __post_init__(self) -> None:
        if not isinstance(self.value, Value):
            raise TypeError(f"Item value must be a Value, got {type(self.value).__name__}")

    @property
    def item_type(self) -> ItemType:
        return self.value.item_type

    @property
    def children(self) -> tuple["Item", ...]:
        """Child items of a structure.

        Raises:
            NotAStructure: If this item does not hold a Structure.
        """
        if not isinstance(self.value, Structure):
            raise NotAStructure(
                f"{describe_tag(self.tag)} holds {self.value.item_type.name}, not STRUCTURE"
            )
        return self.value.items

    def find_all(self, tag: Any) -> list["Item"]:
        """Return every direct child carrying ``tag``, in wire order."""
        return [child for child in self.children if child.tag == tag]

    def path(self, *tags: Any) -> "Item":
        """Follow ``tags`` down through nested structures. See ``query.path``."""
        from .query import path

        return path(self, tags)

    def value_as(self, target: Any) -> Any:
        """Extract the value as a native type. See ``query.value``."""
        from .query import value

        return value(self, target)


def structure(tag: Any, items: Iterable[Item]) -> Item:
    """Shorthand for ``Item(tag, Structure(items))``."""
    return Item(tag, Structure(tuple(items)))
