from __future__ import annotations

"""
JSON Resource Descriptor (JRD) models
=====================================

A JRD is a JSON object describing a "resource" on the Internet: any entity
identified by a URI or IRI, such as an account URI (`acct:bob@example.com`) or
a web URI. It was introduced by RFC 6415 (host metadata) and adopted by
WebFinger (RFC 7033).

Design principles:
- Pydantic v2 value models; instances are frozen and compare structurally.
- Member order on the wire follows field declaration order.
- Optional members that are absent or empty are omitted from output,
  never written as `null`, `[]` or `{}`.
- `properties` and `titles` are held in ascending key order.
- `expires` is held in UTC with whole-second precision and written as
  `YYYY-MM-DDTHH:MM:SSZ`.
- Unknown members are ignored on input.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_serializer

from ..core.config import CodecConfig
from ..core.time import Clock, SystemClock, format_rfc3339, normalize_utc, parse_rfc3339
from ..core.types import UNDETERMINED_LANGUAGE, LanguageTag, LinkRel, Map, MediaType, Time, Uri

__all__ = ["LinkDescriptor", "ResourceDescriptor"]

# Members omitted from output when absent or empty (wire and field names).
_LINK_OPTIONAL = frozenset({"type", "link_type", "href", "titles", "properties"})
_RESOURCE_OPTIONAL = frozenset({"aliases", "properties", "expires", "links"})


def _drop_empty(data: dict[str, Any], optional: frozenset[str]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k not in optional or v not in (None, [], {})}


# --------------------------------------------------------------------------- #
# Link
# --------------------------------------------------------------------------- #


class LinkDescriptor(BaseModel):
    """
    One entry of the "links" array.

    The context of the link is the descriptor's subject. When several links
    share a `rel`, the first one in array order is the preferred one.

    Fields:
        rel: Link relation type, a URI or a registered relation type
             (RFC 8288). Required. Compared with simple string comparison
             (RFC 3986 section 6.2.1): no normalization, no case folding.
        link_type: Media type of the target resource (RFC 6838). Written as
             "type" on the wire.
        href: URI of the linked resource.
        titles: Human-readable labels keyed by language tag, or "und" when
             the language is unknown. A repeated tag in the input is not an
             error; the last one wins.
        properties: Additional information about the link relation, keyed by
             URI ("property identifiers"), e.g.
             `{"http://packetizer.com/ns/port": "993"}`.
    """

    # revalidated when nested, so descriptors never share a link or its mappings
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", revalidate_instances="always")
    # frozen, but holds dicts: unhashable like them
    __hash__ = None

    rel: LinkRel
    link_type: MediaType | None = Field(default=None, alias="type")
    href: Uri | None = None
    titles: Map = Field(default_factory=dict)
    properties: Map = Field(default_factory=dict)

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler) -> dict[str, Any]:
        return _drop_empty(handler(self), _LINK_OPTIONAL)

    def title(self, lang: LanguageTag = UNDETERMINED_LANGUAGE) -> str | None:
        """Title for `lang` (exact tag match), falling back to the "und" title."""
        if lang in self.titles:
            return self.titles[lang]
        return self.titles.get(UNDETERMINED_LANGUAGE)

    @classmethod
    def from_json(cls, data: str | bytes) -> LinkDescriptor:
        from ..codec.jrd_json import parse_link  # local import to avoid a cycle

        return parse_link(data)

    def to_json(self, config: CodecConfig | None = None) -> str:
        from ..codec.jrd_json import serialize_link

        return serialize_link(self, config=config)


# --------------------------------------------------------------------------- #
# Resource
# --------------------------------------------------------------------------- #


class ResourceDescriptor(BaseModel):
    """
    The whole JRD document.

    Fields:
        subject: URI identifying the entity the JRD describes. It SHOULD be
             present; an absent subject parses as the empty string.
        aliases: Zero or more URIs identifying the same entity as `subject`.
        properties: Information about the subject keyed by URI, e.g.
             `{"http://packetizer.com/ns/name": "Bob Smith"}`.
        expires: Instant after which the JRD SHOULD be considered expired.
             Defined for host metadata (RFC 6415) only; WebFinger must not
             send it and ignores it when received (see `for_webfinger`).
             Input accepts any RFC 3339 offset and fractional seconds; the
             value is normalized to UTC whole seconds.
        links: Link relation objects, most preferred first.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", revalidate_instances="always")
    __hash__ = None

    subject: Uri = ""
    aliases: list[Uri] = Field(default_factory=list)
    properties: Map = Field(default_factory=dict)
    expires: Time | None = None
    links: list[LinkDescriptor] = Field(default_factory=list)

    @field_validator("expires", mode="before")
    @classmethod
    def _parse_expires(cls, v: Any) -> Any:
        if v is None or isinstance(v, datetime):
            return v
        if isinstance(v, str):
            return parse_rfc3339(v)
        # numbers would otherwise be taken as unix timestamps
        raise ValueError("expires must be an RFC 3339 date-time string")

    @field_validator("expires")
    @classmethod
    def _expires_utc(cls, v: datetime | None) -> datetime | None:
        return normalize_utc(v) if v is not None else None

    @field_serializer("expires", when_used="json-unless-none")
    def _format_expires(self, v: datetime) -> str:
        return format_rfc3339(v)

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler) -> dict[str, Any]:
        return _drop_empty(handler(self), _RESOURCE_OPTIONAL)

    # ---- Link lookup ---------------------------------------------------------

    def links_for(self, rel: LinkRel) -> list[LinkDescriptor]:
        """All links whose `rel` equals `rel` exactly, most preferred first."""
        return [link for link in self.links if link.rel == rel]

    def preferred_link(self, rel: LinkRel) -> LinkDescriptor | None:
        for link in self.links:
            if link.rel == rel:
                return link
        return None

    # ---- Expiry --------------------------------------------------------------

    def is_expired(self, clock: Clock | None = None) -> bool:
        """True once `expires` is set and not after the clock's current time."""
        if self.expires is None:
            return False
        return (clock or SystemClock()).now_dt() >= self.expires

    def for_webfinger(self) -> ResourceDescriptor:
        """Copy of this descriptor without `expires`."""
        if self.expires is None:
            return self
        return self.model_copy(update={"expires": None})

    # ---- Text form -----------------------------------------------------------

    @classmethod
    def from_json(cls, data: str | bytes, config: CodecConfig | None = None) -> ResourceDescriptor:
        from ..codec.jrd_json import parse_resource  # local import to avoid a cycle

        return parse_resource(data, config=config)

    def to_json(self, config: CodecConfig | None = None) -> str:
        from ..codec.jrd_json import serialize_resource

        return serialize_resource(self, config=config)
