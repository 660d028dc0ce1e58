"""A codec bound to one tag map and one set of decode options."""

from collections.abc import Iterator
from typing import Any

from .decoding import decode, decode_all, iter_decode
from .encoding import encode, encode_bytes
from .options import DecodeOptions
from .tags import RAW_TAGS, TagMap
from .values import Item


class Codec:
    """Encoder and decoder sharing a tag map and decoder settings.

    Example:
        codec = Codec(EnumTags(Tag), DecodeOptions.strict())
        data = codec.encode_bytes(message)
        decoded, consumed = codec.decode(data)
    """

    __slots__ = ("_tags", "_options")

    def __init__(self, tags: TagMap = RAW_TAGS, options: DecodeOptions | None = None) -> None:
        self._tags = tags
        self._options = options if options is not None else DecodeOptions()

    @property
    def tags(self) -> TagMap:
        return self._tags

    @property
    def options(self) -> DecodeOptions:
        return self._options

    def encode(self, item: Item, buffer: Any, offset: int = 0) -> int:
        """Encode into ``buffer`` and return the bytes written."""
        return encode(item, buffer, self._tags, offset)

    def encode_bytes(self, item: Item) -> bytes:
        return encode_bytes(item, self._tags)

    def decode(self, data: Any, offset: int = 0) -> tuple[Item, int]:
        """Decode one item and return it with the bytes consumed."""
        return decode(data, self._tags, self._options, offset=offset)

    def iter_decode(self, data: Any) -> Iterator[tuple[Item, int]]:
        return iter_decode(data, self._tags, self._options)

    def decode_all(self, data: Any) -> list[Item]:
        return decode_all(data, self._tags, self._options)

    def __repr__(self) -> str:
        return f"Codec({self._tags!r}, {self._options!r})"
