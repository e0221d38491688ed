from __future__ import annotations

"""
jrdkit.core.log
===============

Structured logging for the library, built on stdlib `logging`:
- Context propagation via contextvars (kind, media_type, codec).
- JSON formatter for machines; human formatter for local debugging.
- LoggerAdapter that accepts arbitrary keyword fields.
- The `jrdkit` logger is silent until an application opts in.
"""

import contextvars
import json
import logging
import os
import sys
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any, ClassVar, Final

__all__ = [
    "bind_context",
    "configure_from_env",
    "disable_stdout_logging",
    "enable_stdout_logging",
    "get_logger",
    "log_context",
    "set_level",
]

# ---------- Context ----------

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar("jrdkit_log_ctx", default=None)


def _ctx_copy() -> dict[str, Any]:
    ctx = _log_context.get()
    return dict(ctx) if ctx else {}


def bind_context(**fields: Any) -> None:
    """Merge fields into the current structured log context (None values skipped)."""
    ctx = _ctx_copy()
    ctx.update({k: v for k, v in fields.items() if v is not None})
    _log_context.set(ctx)


@contextmanager
def log_context(**fields: Any):
    """
    Temporarily add fields to the structured log context.
    Restores the previous context on exit.
    """
    token = _log_context.set({**_ctx_copy(), **{k: v for k, v in fields.items() if v is not None}})
    try:
        yield
    finally:
        _log_context.reset(token)


# ---------- Formatters ----------

# LogRecord attributes that are not user fields.
_STD_ATTRS: Final[frozenset[str]] = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def _iso_utc_ms(ts: float) -> str:
    dt = datetime.fromtimestamp(ts, tz=UTC)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _exc_tuple(record: logging.LogRecord):
    ei = record.exc_info
    if isinstance(ei, BaseException):
        return (type(ei), ei, ei.__traceback__)
    if ei is True:
        return sys.exc_info()
    if isinstance(ei, tuple):
        return ei
    return None


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record. Merges:
      - ts, level, logger, message
      - contextvars fields
      - extra=... fields (non-standard LogRecord attributes)
      - exception type/message (and stack when include_stack=True)
    """

    def __init__(self, *, include_stack: bool = False) -> None:
        super().__init__()
        self.include_stack = include_stack

    def format(self, record: logging.LogRecord) -> str:
        out: dict[str, Any] = {
            "ts": _iso_utc_ms(record.created),
            "level": record.levelname,
            "logger": record.name,
        }
        msg = record.getMessage()
        if msg:
            out["message"] = msg

        ctx = _log_context.get()
        if ctx:
            out.update(ctx)

        for k, v in record.__dict__.items():
            if k not in _STD_ATTRS and k not in out:
                out[k] = v

        exc = _exc_tuple(record)
        if exc:
            out["error"] = {
                "type": exc[0].__name__ if exc[0] else "Exception",
                "message": str(exc[1]) if exc[1] else None,
            }
            if self.include_stack:
                out["error"]["stack"] = self.formatException(exc)

        return json.dumps(out, ensure_ascii=False, separators=(",", ":"), default=str)


class HumanFormatter(logging.Formatter):
    """Compact human-friendly formatter for local debugging."""

    default_time_format = "%Y-%m-%d %H:%M:%S"
    default_msec_format = "%s.%03d"

    _ctx_keys: ClassVar[tuple[str, ...]] = ("kind", "media_type", "codec")

    def format(self, record: logging.LogRecord) -> str:
        s = f"{self.formatTime(record)} {record.levelname:<5} {record.name}: {record.getMessage()}"
        ctx = _log_context.get() or {}
        compact = {k: getattr(record, k, ctx.get(k)) for k in self._ctx_keys}
        compact = {k: v for k, v in compact.items() if v is not None}
        if compact:
            s += "  [" + ", ".join(f"{k}={v}" for k, v in compact.items()) + "]"
        exc = _exc_tuple(record)
        if exc:
            s += "\n" + self.formatException(exc)
        return s


class ContextFilter(logging.Filter):
    """Inject current log context into LogRecord for downstream handlers."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _log_context.get()
        if ctx:
            for k, v in ctx.items():
                record.__dict__.setdefault(k, v)
        return True


class _KwExtraAdapter(logging.LoggerAdapter):
    """
    Moves unknown kwargs into `extra={...}` so callers can write:

        log.debug("parse failed", event="jrd.parse.failed", errors=2)
    """

    _passthrough: ClassVar[frozenset[str]] = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})

    def process(self, msg, kwargs):
        extra = kwargs.get("extra")
        if not isinstance(extra, dict):
            extra = {}
        for k in [k for k in kwargs if k not in self._passthrough]:
            v = kwargs.pop(k)
            # LogRecord refuses to overwrite its own attributes
            key = f"field_{k}" if k in _STD_ATTRS else k
            extra.setdefault(key, v)
        # ContextFilter only runs for records logged on "jrdkit" itself
        for k, v in _ctx_copy().items():
            extra.setdefault(f"field_{k}" if k in _STD_ATTRS else k, v)
        kwargs["extra"] = extra
        return msg, kwargs


# ---------- Public configuration API ----------

_LOGGER_NAME = "jrdkit"
_HANDLER_NAME = "_jrdkit_stdout_handler"
_configured = False


def _bootstrap_minimal() -> None:
    """Install a NullHandler and a context filter to keep the library silent by default."""
    global _configured
    if _configured:
        return
    lg = logging.getLogger(_LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in lg.handlers):
        lg.addHandler(logging.NullHandler())
    if not any(isinstance(f, ContextFilter) for f in lg.filters):
        lg.addFilter(ContextFilter())
    _configured = True


def get_logger(name: str | None = None) -> logging.LoggerAdapter:
    """Return a `jrdkit.<name>` logger adapter that accepts keyword fields."""
    _bootstrap_minimal()
    base = logging.getLogger(_LOGGER_NAME)
    return _KwExtraAdapter(base.getChild(name) if name else base, {})


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    val = getattr(logging, str(level).upper(), None)
    if isinstance(val, int):
        return val
    raise ValueError(f"Invalid level name: {level!r}")


def set_level(level: int | str) -> None:
    """Change library logger level at runtime (affects all children)."""
    logging.getLogger(_LOGGER_NAME).setLevel(_resolve_level(level))


def enable_stdout_logging(
    *,
    level: int | str = logging.DEBUG,
    json_output: bool = True,
    include_stack: bool = False,
    pretty: bool = False,
) -> None:
    """Attach a stdout handler (JSON by default, HumanFormatter with pretty=True)."""
    lvl = _resolve_level(level)
    _bootstrap_minimal()
    lg = logging.getLogger(_LOGGER_NAME)
    disable_stdout_logging()

    fmt: logging.Formatter
    if pretty:
        fmt = HumanFormatter()
    elif json_output:
        fmt = JsonFormatter(include_stack=include_stack)
    else:
        fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    h = logging.StreamHandler(sys.stdout)
    h.set_name(_HANDLER_NAME)
    h.setLevel(lvl)
    h.setFormatter(fmt)
    lg.addHandler(h)
    if lg.level == logging.NOTSET or lg.level > lvl:
        lg.setLevel(lvl)


def disable_stdout_logging() -> None:
    """Detach a previously installed stdout handler, if present."""
    lg = logging.getLogger(_LOGGER_NAME)
    for h in list(lg.handlers):
        if h.get_name() == _HANDLER_NAME:
            lg.removeHandler(h)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes", "on")


def configure_from_env() -> None:
    """
    Env:
      - JRDKIT_LOG_STDOUT=1|true
      - JRDKIT_LOG_LEVEL=DEBUG|INFO|...
      - JRDKIT_LOG_PRETTY=1
      - JRDKIT_LOG_STACK=1
    """
    level = os.getenv("JRDKIT_LOG_LEVEL", "WARNING")
    _bootstrap_minimal()
    set_level(level)
    if _env_flag("JRDKIT_LOG_STDOUT"):
        pretty = _env_flag("JRDKIT_LOG_PRETTY")
        enable_stdout_logging(
            level=level,
            json_output=not pretty,
            include_stack=_env_flag("JRDKIT_LOG_STACK"),
            pretty=pretty,
        )
    else:
        disable_stdout_logging()


# Silent by default.
_bootstrap_minimal()
