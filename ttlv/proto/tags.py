"""Mapping between application tags and 24-bit wire codes.

The codec never interprets tags itself. Callers supply a ``TagMap`` that
converts their own identifiers (usually an enum) to and from the code
written on the wire.

Example:
    class Tag(IntEnum):
        REQUEST_MESSAGE = 0x420078
        REQUEST_HEADER = 0x420077
        PROTOCOL_VERSION = 0x420069

    tags = EnumTags(Tag)
    tags.code_of(Tag.REQUEST_HEADER)  # 0x420077
    tags.tag_of(0x420069)  # Tag.PROTOCOL_VERSION
    tags.tag_of(0x540001)  # None
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

from .types import MAX_TAG_CODE

E = TypeVar("E", bound=Enum)


def is_tag_code(code: Any) -> bool:
    """Check that a value is usable as a 24-bit wire code."""
    return isinstance(code, int) and not isinstance(code, bool) and 0 <= code <= MAX_TAG_CODE


@dataclass(frozen=True, slots=True)
class UnknownTag:
    """A wire code the tag map did not recognise.

    The decoder keeps these instead of failing so messages carrying
    vendor extensions still parse, and the encoder writes the code back
    out unchanged.
    """

    code: int

    def __post_init__(self) -> None:
        if not is_tag_code(self.code):
            raise ValueError(f"Tag code out of 24-bit range: {self.code!r}")

    def __str__(self) -> str:
        return f"0x{self.code:06X}"


class TagMap(Protocol):
    """Converts between application tags and wire codes.

    ``code_of`` returns None for a tag it cannot represent. ``tag_of``
    returns None for a code it does not recognise.
    """

    def code_of(self, tag: Any) -> int | None: ...

    def tag_of(self, code: int) -> Any | None: ...


class EnumTags(Generic[E]):
    """Tag map backed by an enum whose member values are the wire codes."""

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self._codes: dict[E, int] = {}
        self._tags: dict[int, E] = {}

        for member in enum_cls:
            if not is_tag_code(member.value):
                raise ValueError(
                    f"{enum_cls.__name__}.{member.name} has no 24-bit tag code: {member.value!r}"
                )
            self._codes[member] = member.value
            self._tags[member.value] = member

    def code_of(self, tag: Any) -> int | None:
        if not isinstance(tag, self.enum_cls):
            return None
        return self._codes.get(tag)

    def tag_of(self, code: int) -> E | None:
        return self._tags.get(code)

    def __repr__(self) -> str:
        return f"EnumTags({self.enum_cls.__name__})"


class RawTags:
    """Identity tag map for callers that work with plain integer codes."""

    def code_of(self, tag: Any) -> int | None:
        return tag if is_tag_code(tag) else None

    def tag_of(self, code: int) -> int:
        return code

    def __repr__(self) -> str:
        return "RawTags()"


RAW_TAGS = RawTags()


def describe_tag(tag: Any) -> str:
    """Human-readable tag name for messages and diagnostics."""
    if isinstance(tag, Enum):
        return tag.name
    if is_tag_code(tag):
        return f"0x{tag:06X}"
    return str(tag)
