"""ttlv - Tag-Type-Length-Value codec for KMIP-style wire protocols."""

from importlib.metadata import PackageNotFoundError, version

from .proto import *  # noqa: F403

try:
    __version__ = version("ttlv")
except PackageNotFoundError:
    __version__ = "(local)"
