"""Exceptions raised by the TTLV encoder, decoder and query layer."""


class TtlvError(RuntimeError):
    """Base class for every error raised by this package."""


class EncodeError(TtlvError):
    """Raised when an item cannot be encoded."""


class BufferTooSmall(EncodeError):
    """Raised when the output buffer cannot hold the encoded item."""


class TagConversionFailed(EncodeError):
    """Raised when a tag has no valid 24-bit wire code."""


class DecodeError(TtlvError):
    """Raised when input bytes are not a well-formed TTLV item.

    Attributes:
        offset: Position in the input of the item header being decoded.
    """

    def __init__(self, message: str, offset: int = 0) -> None:
        super().__init__(f"{message} (at offset {offset})")
        self.offset = offset


class BufferTooShort(DecodeError):
    """Raised when fewer bytes remain than a header, value or padding requires."""


class InvalidType(DecodeError):
    """Raised when the type byte is not a known type code."""


class InvalidLength(DecodeError):
    """Raised when a declared length does not fit its type or its parent."""


class InvalidUtf8(DecodeError):
    """Raised when a text string is not valid UTF-8."""


class InvalidPadding(DecodeError):
    """Raised in strict mode when alignment padding is not all zero."""


class InvalidValue(DecodeError):
    """Raised in strict mode when a boolean is neither 0 nor 1."""


class RecursionLimitExceeded(DecodeError):
    """Raised when structures nest deeper than the configured limit."""


class PathError(TtlvError):
    """Raised when a path query cannot be resolved."""


class TagNotFound(PathError):
    """Raised when no child carries the requested tag."""


class NotAStructure(PathError):
    """Raised when a path step lands on an item that has no children."""


class TypeMismatch(TtlvError):
    """Raised when a value cannot be extracted as the requested type."""


class ValueOutOfRange(TypeMismatch):
    """Raised when a numeric value does not fit the requested width."""
