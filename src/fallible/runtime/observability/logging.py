"""Structured logging with bound context.

The library logs at its capture boundaries only: every exception turned
into a Failure, and every scoped resource released. Both are debug
events, so nothing is printed at the default INFO level.

Quick Start:
    >>> from fallible.runtime.observability import configure_logging, get_logger
    >>>
    >>> # Configure (once at startup)
    >>> configure_logging(format="console", level="DEBUG")  # or "json" for production
    >>>
    >>> log = get_logger("billing")
    >>> log.info("invoice parsed", invoice_id=123)

    # Or from FALLIBLE_LOG_* settings:
    >>> configure_from_settings()
"""

from __future__ import annotations

import json
import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

from fallible.foundation.errors import JsonDict, JsonValue

if TYPE_CHECKING:
    from fallible.foundation.config import FallibleSettings


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context.

    Binds key-value pairs that appear in every log entry.
    Immutable - bind() returns a new logger with merged context.

    Example:
        >>> log = BoundLogger(context={"logger": "fallible.outcome"})
        >>> log.bind(operation="map").debug("fault captured", fault_type="KeyError")
        # => 10:30:45.123 [debug] fault captured fault_type="KeyError" logger="fallible.outcome" operation="map"
    """

    context: JsonDict = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int = logging.DEBUG

    def bind(self, **kw: JsonValue) -> BoundLogger:
        """Create new logger with additional bound context."""
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer, _level=self._level)

    def _log(self, level: int, event: str, **kw: JsonValue) -> None:
        if level < self._level:
            return
        entry = LogEntry(
            timestamp=time.time(),
            level=_level_name(level),
            event=event,
            context={**self.context, **kw},
        )
        (self._renderer or _get_renderer()).render(entry)

    def debug(self, event: str, **kw: JsonValue) -> None:
        self._log(logging.DEBUG, event, **kw)

    def info(self, event: str, **kw: JsonValue) -> None:
        self._log(logging.INFO, event, **kw)


@dataclass(slots=True)
class LogEntry:
    """Immutable log entry with all context."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable console output.

    Format: timestamp [level] event key=value key2=value2

    Colors are auto-detected based on TTY, can be forced on/off.
    """

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = hasattr(self.output, "isatty") and self.output.isatty()

    def render(self, entry: LogEntry) -> None:
        c = _COLORS if self.colors else _NO_COLORS
        level_color = _LEVEL_COLORS.get(entry.level, c["dim"]) if self.colors else ""
        parts: list[str] = []
        if self.show_timestamp:
            parts.append(f"{c['dim']}{entry.ts_human}{c['reset']}")
        parts.append(f"{level_color}[{entry.level}]{c['reset']}")
        parts.append(f"{c['bold']}{entry.event}{c['reset']}")
        for k, v in sorted(entry.context.items()):
            if k == "traceback":
                continue
            parts.append(f"{c['cyan']}{k}{c['reset']}={_format_value(v, c)}")
        print(" ".join(parts), file=self.output)
        if "traceback" in entry.context:
            print(f"{c['red']}{entry.context['traceback']}{c['reset']}", file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output, one object per entry."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        data = {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context}
        print(json.dumps(data, default=str), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer for testing."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


_renderer: ContextVar[LogRenderer | None] = ContextVar("log_renderer", default=None)
_default_level: ContextVar[int] = ContextVar("log_level", default=logging.INFO)


def configure_logging(
    format: str = "console",  # noqa: A002 - shadows builtin but matches stdlib
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Configure global structured logging.

    Args:
        format: Output format - "console" (human), "json" (machine), "none"
        level: Minimum log level - DEBUG, INFO, WARNING, ERROR
        output: Output stream (default: stderr for console, stdout for json)
        colors: Force colors on/off (None = auto-detect)

    Returns:
        Configured renderer instance
    """
    _default_level.set(getattr(logging, level.upper(), logging.INFO))

    renderer: LogRenderer
    if format == "console":
        renderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
    elif format == "json":
        renderer = JsonRenderer(output=output or sys.stdout)
    elif format == "none":
        renderer = NoOpRenderer()
    else:
        raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")

    _renderer.set(renderer)
    return renderer


def configure_from_settings(settings: FallibleSettings | None = None, *, output: TextIO | None = None) -> LogRenderer:
    """Configure logging from FALLIBLE_LOG_* settings (debug mode forces DEBUG)."""
    if settings is None:
        from fallible.foundation.config import get_settings
        settings = get_settings()
    return configure_logging(
        settings.logging.format,
        settings.effective_log_level,
        output=output,
        colors=settings.logging.colors,
    )


def reset_logging() -> None:
    """Back to defaults: INFO level, lazily created console renderer."""
    _default_level.set(logging.INFO)
    _renderer.set(None)


def get_logger(name: str | None = None, **initial_context: JsonValue) -> BoundLogger:
    """Get a structured logger with optional initial context.

    Args:
        name: Logger name (added to context as 'logger')
        **initial_context: Initial bound key-value pairs
    """
    ctx = dict(initial_context)
    if name:
        ctx["logger"] = name
    return BoundLogger(context=ctx, _level=_default_level.get())


def _get_renderer() -> LogRenderer:
    renderer = _renderer.get()
    if renderer is None:
        renderer = ConsoleRenderer()
        _renderer.set(renderer)
    return renderer


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "cyan": "\033[36m",
}

_NO_COLORS = {k: "" for k in _COLORS}

_LEVEL_COLORS = {
    "debug": _COLORS["dim"],
    "info": _COLORS["blue"],
}


def _level_name(level: int) -> str:
    return logging.getLevelName(level).lower()


def _format_value(v: object, c: dict[str, str]) -> str:
    if isinstance(v, str):
        return f'{c["yellow"]}"{v}"{c["reset"]}'
    if isinstance(v, bool):
        return f'{c["blue"]}{str(v).lower()}{c["reset"]}'
    if isinstance(v, (int, float)):
        return f'{c["blue"]}{v}{c["reset"]}'
    if isinstance(v, (list, tuple)):
        return f'{c["dim"]}[{len(v)} items]{c["reset"]}'
    return repr(v)
