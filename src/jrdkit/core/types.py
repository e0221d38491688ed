from __future__ import annotations

"""
jrdkit.core.types
=================

Shared type aliases and small constants used across the codebase.
Keep this module **tiny**: no model imports here.

Guidelines:
- `Map` is the ordered string mapping used for `properties` and `titles`.
- `Time` is always a timezone-aware UTC datetime.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Annotated, Final

from pydantic import AfterValidator


def sort_map(value: Mapping[str, str]) -> dict[str, str]:
    """Return a new dict with keys in ascending lexicographic order."""
    return {k: value[k] for k in sorted(value)}


# Validated dicts are rebuilt in key order, so iteration (and serialization)
# order is deterministic regardless of how the mapping was supplied.
Map = Annotated[dict[str, str], AfterValidator(sort_map)]

Time = datetime

# Link relation / language tag / URI strings (semantic sugar over str)
Uri = str
LinkRel = str
LanguageTag = str
MediaType = str

# ---- Constants ---------------------------------------------------------------

# Title key used when the language is unknown or unspecified.
UNDETERMINED_LANGUAGE: Final[str] = "und"

# RFC 7033 media type for JRD documents.
JRD_MEDIA_TYPE: Final[str] = "application/jrd+json"
JSON_MEDIA_TYPE: Final[str] = "application/json"

# Canonical pretty-print indentation.
DEFAULT_INDENT: Final[int] = 2


__all__ = [
    "DEFAULT_INDENT",
    "JRD_MEDIA_TYPE",
    "JSON_MEDIA_TYPE",
    "LanguageTag",
    "LinkRel",
    "Map",
    "MediaType",
    "Time",
    "UNDETERMINED_LANGUAGE",
    "Uri",
    "sort_map",
]
