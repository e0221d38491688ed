from __future__ import annotations

# Runtime package version, provided by setuptools_scm during build.
try:
    # created at build time by setuptools_scm (see [tool.setuptools_scm].version_file)
    from ._version import __version__
except ImportError:  # pragma: no cover
    # fallback for editable installs / missing file
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _pkg_version

    try:
        __version__ = _pkg_version("jrdkit")
    except PackageNotFoundError:
        __version__ = "0.0.0"

from .api import (
    FormatError,
    JrdError,
    LinkDescriptor,
    ResourceDescriptor,
    parse_link,
    parse_resource,
    serialize_link,
    serialize_resource,
)
from .core.config import CodecConfig

__all__ = [
    "CodecConfig",
    "FormatError",
    "JrdError",
    "LinkDescriptor",
    "ResourceDescriptor",
    "__version__",
    "parse_link",
    "parse_resource",
    "serialize_link",
    "serialize_resource",
]
