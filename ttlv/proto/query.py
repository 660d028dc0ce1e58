"""Path lookup and typed value extraction over decoded item trees."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from .errors import NotAStructure, TagNotFound, TypeMismatch, ValueOutOfRange
from .tags import describe_tag
from .values import (
    EPOCH,
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


@dataclass(frozen=True, slots=True)
class IntTarget:
    """A fixed-width integer type to extract into, with its valid range."""

    name: str
    min_value: int
    max_value: int

    def __contains__(self, number: int) -> bool:
        return self.min_value <= number <= self.max_value


INT8 = IntTarget("int8", -(2**7), 2**7 - 1)
INT16 = IntTarget("int16", -(2**15), 2**15 - 1)
INT32 = IntTarget("int32", -(2**31), 2**31 - 1)
INT64 = IntTarget("int64", -(2**63), 2**63 - 1)
UINT8 = IntTarget("uint8", 0, 2**8 - 1)
UINT16 = IntTarget("uint16", 0, 2**16 - 1)
UINT32 = IntTarget("uint32", 0, 2**32 - 1)
UINT64 = IntTarget("uint64", 0, 2**64 - 1)

# Variants that carry a plain integer and can feed any integer target
INTEGER_VARIANTS: tuple[type[Value], ...] = (
    Integer,
    LongInteger,
    BigInteger,
    Enumeration,
    Interval,
)


def path(item: Item, tags: Iterable[Any]) -> Item:
    """Walk from ``item`` through nested structures, one tag per step.

    At each step the first child carrying the requested tag is chosen;
    later siblings with the same tag are ignored. An empty ``tags``
    returns ``item`` itself.

    Raises:
        NotAStructure: If a step has to look inside a non-structure item.
        TagNotFound: If no child carries the requested tag.
    """
    current = item
    for step, tag in enumerate(tags):
        if not isinstance(current.value, Structure):
            raise NotAStructure(
                f"Step {step}: {describe_tag(current.tag)} holds "
                f"{current.item_type.name}, not STRUCTURE"
            )
        for child in current.value.items:
            if child.tag == tag:
                current = child
                break
        else:
            raise TagNotFound(
                f"Step {step}: no child tagged {describe_tag(tag)} "
                f"under {describe_tag(current.tag)}"
            )
    return current


def _mismatch(item: Item, wanted: str) -> TypeMismatch:
    return TypeMismatch(
        f"{describe_tag(item.tag)} holds {item.item_type.name}, cannot extract {wanted}"
    )


def _integer(item: Item, wanted: str) -> int:
    if not isinstance(item.value, INTEGER_VARIANTS):
        raise _mismatch(item, wanted)
    return item.value.value  # type: ignore[attr-defined]


def _to_datetime(stored: DateTime) -> datetime:
    return EPOCH + timedelta(seconds=stored.value)


def _to_timedelta(stored: Interval) -> timedelta:
    return timedelta(seconds=stored.value)


# target -> (accepted variant, converter)
_EXTRACTORS: dict[Any, tuple[type[Value], Callable[[Any], Any]]] = {
    bool: (Boolean, lambda v: v.value),
    str: (TextString, lambda v: v.value),
    bytes: (ByteString, lambda v: bytes(v.value)),
    memoryview: (ByteString, lambda v: memoryview(v.value)),
    datetime: (DateTime, _to_datetime),
    timedelta: (Interval, _to_timedelta),
    tuple: (Structure, lambda v: v.items),
    list: (Structure, lambda v: list(v.items)),
}


def value(item: Item, target: Any) -> Any:
    """Extract ``item``'s value as the native type ``target``.

    ``target`` is one of ``int``, ``bool``, ``str``, ``bytes``,
    ``memoryview``, ``datetime``, ``timedelta``, ``tuple``, ``list`` or an
    ``IntTarget`` such as ``INT32``. Integer targets accept every integer
    variant (Integer, LongInteger, BigInteger, Enumeration, Interval) and
    range-check the stored number.

    Raises:
        TypeMismatch: If the stored variant does not convert to ``target``.
        ValueOutOfRange: If the number does not fit the ``IntTarget``.
        TypeError: If ``target`` is not a supported extraction target.
    """
    if isinstance(target, IntTarget):
        number = _integer(item, target.name)
        if number not in target:
            raise ValueOutOfRange(
                f"{describe_tag(item.tag)} holds {number}, outside {target.name} "
                f"[{target.min_value}, {target.max_value}]"
            )
        return number

    if target is int:
        return _integer(item, "int")

    if target not in _EXTRACTORS:
        raise TypeError(f"Unsupported extraction target: {target!r}")

    variant, convert = _EXTRACTORS[target]
    if not isinstance(item.value, variant):
        raise _mismatch(item, getattr(target, "__name__", str(target)))
    try:
        return convert(item.value)
    except OverflowError as exc:
        seconds = item.value.value  # type: ignore[attr-defined]
        raise ValueOutOfRange(
            f"{describe_tag(item.tag)} holds {seconds} seconds, outside {target.__name__}"
        ) from exc
