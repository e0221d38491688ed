from __future__ import annotations

"""
jrdkit.core.config
==================

Codec configuration.
- No external deps; optional JSON file loading.
- Small env overrides for convenience.

If a config file path is not provided or not found, defaults produce the
canonical pretty form (2-space indent, UTF-8 text as-is).
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .types import DEFAULT_INDENT

__all__ = ["CodecConfig"]

_TRUE = ("1", "true", "yes", "on")


def _try_load_json(path: Path | None) -> dict[str, Any]:
    if not path:
        return {}
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            return data if isinstance(data, dict) else {}
    except (OSError, ValueError):
        # Fail soft (callers may still override)
        pass
    return {}


def _parse_indent_env(val: str) -> int | None:
    val = val.strip().lower()
    if val in ("", "none", "compact"):
        return None
    return int(val)


@dataclass(frozen=True)
class CodecConfig:
    """How descriptors are written as JSON text."""

    # None -> compact single-line output
    indent: int | None = DEFAULT_INDENT
    ensure_ascii: bool = False
    # WebFinger responses must not carry "expires"; drop it both ways
    webfinger: bool = False

    def __post_init__(self) -> None:
        if self.indent is not None and (not isinstance(self.indent, int) or self.indent < 0):
            raise ValueError("indent must be a non-negative integer or None")

    @property
    def separators(self) -> tuple[str, str]:
        return (",", ": ") if self.indent is not None else (",", ":")

    @classmethod
    def load(cls, path: Path | str | None = None, *, overrides: dict[str, Any] | None = None) -> CodecConfig:
        """
        Load config from JSON file (if provided), then apply env and overrides.

        Env overrides:
          - JRDKIT_INDENT (integer, or "none" for compact output)
          - JRDKIT_ENSURE_ASCII
          - JRDKIT_WEBFINGER
        """
        data: dict[str, Any] = {}

        # File
        data.update(_try_load_json(Path(path) if path else None))

        # Env
        if "JRDKIT_INDENT" in os.environ:
            data["indent"] = _parse_indent_env(os.environ["JRDKIT_INDENT"])
        if "JRDKIT_ENSURE_ASCII" in os.environ:
            data["ensure_ascii"] = os.environ["JRDKIT_ENSURE_ASCII"].lower() in _TRUE
        if "JRDKIT_WEBFINGER" in os.environ:
            data["webfinger"] = os.environ["JRDKIT_WEBFINGER"].lower() in _TRUE

        # Overrides
        if overrides:
            data.update(overrides)

        known = {"indent", "ensure_ascii", "webfinger"}
        return cls(**{k: v for k, v in data.items() if k in known})
