# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
jrdkit public API.

This module re-exports the stable contracts: descriptor models, the text
codec, codec registry and the error taxonomy.
"""

# Codecs
from ..codec.jrd_json import parse_link, parse_resource, serialize_link, serialize_resource
from ..codec.registry import Codec, CodecsRegistry, JrdJsonCodec, get_default_codecs

# Config / time
from ..core.config import CodecConfig
from ..core.time import Clock, ManualClock, SystemClock, format_rfc3339, parse_rfc3339

# Models
from ..protocol.descriptor import LinkDescriptor, ResourceDescriptor

# Errors
from .errors import FormatError, JrdError

__all__ = [
    # errors
    "JrdError",
    "FormatError",
    # models
    "LinkDescriptor",
    "ResourceDescriptor",
    # text codec
    "parse_resource",
    "serialize_resource",
    "parse_link",
    "serialize_link",
    # registry
    "Codec",
    "CodecsRegistry",
    "JrdJsonCodec",
    "get_default_codecs",
    # config / time
    "CodecConfig",
    "Clock",
    "SystemClock",
    "ManualClock",
    "parse_rfc3339",
    "format_rfc3339",
]
