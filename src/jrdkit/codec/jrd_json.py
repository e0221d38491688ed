from __future__ import annotations

"""
jrdkit.codec.jrd_json
=====================

Text form of JRD documents:
- parse_resource / parse_link: JSON text (str or UTF-8 bytes) -> model.
- serialize_resource / serialize_link: model -> JSON text.

Parsing raises FormatError and nothing else for bad input. Serializing a
valid model cannot fail. Output follows CodecConfig; the default is the
canonical pretty form (2-space indent, no trailing newline).
"""

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..api.errors import FormatError
from ..core.config import CodecConfig
from ..core.log import get_logger, log_context
from ..protocol.descriptor import LinkDescriptor, ResourceDescriptor

__all__ = [
    "dumps",
    "parse_link",
    "parse_resource",
    "serialize_link",
    "serialize_resource",
]

log = get_logger("codec")

_DEFAULT_CONFIG = CodecConfig()

M = TypeVar("M", bound=BaseModel)


def _errors_of(exc: ValidationError) -> list[dict[str, Any]]:
    return [{"loc": e["loc"], "msg": e["msg"], "type": e["type"]} for e in exc.errors(include_url=False)]


def _validate(model: type[M], data: str | bytes) -> M:
    with log_context(kind=model.__name__):
        try:
            return model.model_validate_json(data)
        except ValidationError as e:
            errors = _errors_of(e)
            first = errors[0] if errors else {"loc": (), "msg": str(e)}
            where = ".".join(str(p) for p in first["loc"]) or "<document>"
            log.debug(
                "jrd parse failed",
                event="jrd.parse.failed",
                errors=len(errors),
                first_type=first.get("type"),
            )
            raise FormatError(f"invalid {model.__name__} at {where}: {first['msg']}", errors=errors) from e


def dumps(data: Any, config: CodecConfig | None = None) -> str:
    """JSON text of an already-dumped model dict, formatted per `config`."""
    cfg = config or _DEFAULT_CONFIG
    return json.dumps(data, indent=cfg.indent, ensure_ascii=cfg.ensure_ascii, separators=cfg.separators)


# ---------------------------------------------------------------------------


def parse_resource(data: str | bytes, *, config: CodecConfig | None = None) -> ResourceDescriptor:
    """
    Parse a JRD document.

    Missing optional members default (empty subject, no aliases, properties,
    expires or links). With `config.webfinger`, a received `expires` is
    dropped.
    """
    cfg = config or _DEFAULT_CONFIG
    jrd = _validate(ResourceDescriptor, data)
    if cfg.webfinger and jrd.expires is not None:
        log.debug("ignoring expires on WebFinger input", event="jrd.codec.webfinger.expires_dropped")
        jrd = jrd.for_webfinger()
    return jrd


def serialize_resource(jrd: ResourceDescriptor, *, config: CodecConfig | None = None) -> str:
    """
    Members are written in the order subject, aliases, properties, expires,
    links; empty or absent optional members are left out.
    """
    cfg = config or _DEFAULT_CONFIG
    if cfg.webfinger and jrd.expires is not None:
        log.debug("dropping expires from WebFinger output", event="jrd.codec.webfinger.expires_dropped")
        jrd = jrd.for_webfinger()
    return dumps(jrd.model_dump(mode="json", by_alias=True), cfg)


def parse_link(data: str | bytes) -> LinkDescriptor:
    """Parse a single link relation object; `rel` is required."""
    return _validate(LinkDescriptor, data)


def serialize_link(link: LinkDescriptor, *, config: CodecConfig | None = None) -> str:
    return dumps(link.model_dump(mode="json", by_alias=True), config)
