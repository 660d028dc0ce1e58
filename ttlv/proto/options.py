"""Decoder configuration."""

from dataclasses import dataclass, replace
from typing import Self

DEFAULT_MAX_DEPTH = 32


@dataclass(frozen=True, slots=True)
class DecodeOptions:
    """Settings that control how strictly input is parsed.

    Attributes:
        max_depth: Deepest structure nesting accepted. A root structure is
            depth 1; 0 rejects every structure.
        strict_padding: Require alignment padding to be zero and booleans
            to be exactly 0 or 1.
        copy_payloads: Copy byte strings out of the input. When False, byte
            strings are read-only memoryviews that borrow the input buffer.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    strict_padding: bool = False
    copy_payloads: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise TypeError("max_depth must be an int")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")

    @classmethod
    def strict(cls, **overrides: object) -> Self:
        """Options with padding and boolean checks enabled."""
        return cls(strict_padding=True, **overrides)  # type: ignore[arg-type]

    def with_changes(self, **changes: object) -> Self:
        return replace(self, **changes)  # type: ignore[arg-type]
