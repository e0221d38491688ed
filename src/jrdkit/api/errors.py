# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Error taxonomy for jrdkit.

Parsing a JRD document has a single failure kind, `FormatError`. Building a
model from Python values goes through pydantic and raises its
`ValidationError` directly, like any other pydantic model.
"""

from typing import Any

__all__ = ["FormatError", "JrdError"]


class JrdError(Exception):
    """Base class for all jrdkit errors."""

    ...


class FormatError(JrdError, ValueError):
    """
    The input is not a valid JRD document: malformed JSON, a non-object
    document, a member of the wrong JSON kind, a link without `rel`, or an
    `expires` value that is not an RFC 3339 instant.

    `errors` lists the individual problems as `{"loc", "msg", "type"}` dicts.
    """

    def __init__(self, message: str, *, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors: list[dict[str, Any]] = list(errors or [])
