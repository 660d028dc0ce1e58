"""TTLV value model, encoder, decoder and path queries."""

from .codec import Codec
from .decoding import decode, decode_all, iter_decode, peek_length
from .encoding import encode, encode_bytes, encoded_length
from .errors import (
    BufferTooShort,
    BufferTooSmall,
    DecodeError,
    EncodeError,
    InvalidLength,
    InvalidPadding,
    InvalidType,
    InvalidUtf8,
    InvalidValue,
    NotAStructure,
    PathError,
    RecursionLimitExceeded,
    TagConversionFailed,
    TagNotFound,
    TtlvError,
    TypeMismatch,
    ValueOutOfRange,
)
from .options import DecodeOptions
from .query import (
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    IntTarget,
    path,
    value,
)
from .tags import RAW_TAGS, EnumTags, RawTags, TagMap, UnknownTag, describe_tag
from .types import HEADER_SIZE, ItemType, padded_length
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
    structure,
)
