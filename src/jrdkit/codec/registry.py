from __future__ import annotations

from typing import Protocol

from ..core.config import CodecConfig
from ..core.log import get_logger, log_context
from ..core.types import JRD_MEDIA_TYPE, JSON_MEDIA_TYPE, MediaType
from ..protocol.descriptor import ResourceDescriptor
from .jrd_json import parse_resource, serialize_resource

__all__ = [
    "Codec",
    "CodecsRegistry",
    "JrdJsonCodec",
    "get_default_codecs",
    "normalize_media_type",
]

log = get_logger("codec.registry")


def normalize_media_type(media_type: str) -> str:
    """'Application/JRD+JSON; charset=utf-8' -> 'application/jrd+json'."""
    return media_type.split(";", 1)[0].strip().lower()


class Codec(Protocol):
    """Protocol for descriptor codecs keyed by media type.

    A codec must be pure (no side effects) and thread-safe.
    """

    name: str
    media_types: tuple[MediaType, ...]

    def encode(self, jrd: ResourceDescriptor) -> bytes: ...

    def decode(self, blob: bytes | str) -> ResourceDescriptor:
        """Raises FormatError for anything that is not a valid document."""
        ...


class JrdJsonCodec:
    """UTF-8 JSON codec for `application/jrd+json` and plain `application/json`."""

    name = "jrd+json"
    media_types: tuple[MediaType, ...] = (JRD_MEDIA_TYPE, JSON_MEDIA_TYPE)

    def __init__(self, config: CodecConfig | None = None) -> None:
        self.config = config or CodecConfig()

    def encode(self, jrd: ResourceDescriptor) -> bytes:
        return serialize_resource(jrd, config=self.config).encode("utf-8")

    def decode(self, blob: bytes | str) -> ResourceDescriptor:
        return parse_resource(blob, config=self.config)


class CodecsRegistry:
    """Codec registry: lookup by media type, encode/decode shortcuts."""

    def __init__(self) -> None:
        self._codecs: list[Codec] = []

    def register(self, codec: Codec) -> None:
        # last-wins: re-registering a name replaces the earlier codec
        self._codecs = [c for c in self._codecs if c.name != codec.name]
        self._codecs.append(codec)
        log.debug("codec registered", event="jrd.codec.registered", codec=codec.name, media_types=list(codec.media_types))

    def find(self, media_type: MediaType) -> Codec | None:
        """Most recently registered codec that handles `media_type`."""
        wanted = normalize_media_type(media_type)
        for codec in reversed(self._codecs):
            if wanted in (normalize_media_type(m) for m in codec.media_types):
                return codec
        return None

    def _require(self, media_type: MediaType) -> Codec:
        codec = self.find(media_type)
        if codec is None:
            raise LookupError(f"no codec for media type {media_type!r}")
        return codec

    def encode(self, jrd: ResourceDescriptor, media_type: MediaType = JRD_MEDIA_TYPE) -> bytes:
        codec = self._require(media_type)
        with log_context(media_type=normalize_media_type(media_type), codec=codec.name):
            return codec.encode(jrd)

    def decode(self, blob: bytes | str, media_type: MediaType = JRD_MEDIA_TYPE) -> ResourceDescriptor:
        codec = self._require(media_type)
        with log_context(media_type=normalize_media_type(media_type), codec=codec.name):
            return codec.decode(blob)


_default_registry: CodecsRegistry | None = None


def get_default_codecs() -> CodecsRegistry:
    global _default_registry
    if _default_registry is None:
        reg = CodecsRegistry()
        reg.register(JrdJsonCodec())
        _default_registry = reg
    return _default_registry
