"""Request log formatting and console colour control."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Optional, Sequence, TextIO

GREEN = "\033[97;42m"
WHITE = "\033[90;47m"
YELLOW = "\033[90;43m"
RED = "\033[97;41m"
BLUE = "\033[97;44m"
MAGENTA = "\033[97;45m"
CYAN = "\033[97;46m"
RESET = "\033[0m"

_METHOD_COLORS = {
    "GET": BLUE,
    "POST": CYAN,
    "PUT": YELLOW,
    "DELETE": RED,
    "PATCH": GREEN,
    "HEAD": MAGENTA,
    "OPTIONS": WHITE,
}

_SECOND = 1_000_000_000
_MINUTE = 60 * _SECOND

_QUOTE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


class ColorMode(Enum):
    """Whether log output is coloured."""

    AUTO = "auto"
    DISABLE = "disable"
    FORCE = "force"


_color_mode = ColorMode.AUTO


def disable_console_color() -> None:
    """Never colour log output."""
    set_console_color_mode(ColorMode.DISABLE)


def force_console_color() -> None:
    """Always colour log output."""
    set_console_color_mode(ColorMode.FORCE)


def console_color_mode() -> ColorMode:
    """Return the current colour mode."""
    return _color_mode


def set_console_color_mode(mode: ColorMode) -> None:
    """Set the colour mode."""
    global _color_mode
    _color_mode = ColorMode(mode)


def _nanoseconds(duration: float | timedelta) -> int:
    if isinstance(duration, timedelta):
        whole = duration.days * 86_400 + duration.seconds
        return whole * _SECOND + duration.microseconds * 1_000
    if isinstance(duration, int):
        return duration * _SECOND
    return round(duration * _SECOND)


def _split(value: int, precision: int) -> tuple[int, str]:
    whole, frac = divmod(value, 10**precision)
    digits = f"{frac:0{precision}d}".rstrip("0")
    return whole, f".{digits}" if digits else ""


def _format_ns(ns: int) -> str:
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u == 0:
        return "0s"
    if u < 1_000:
        return f"{sign}{u}ns"
    if u < 1_000_000:
        whole, frac = _split(u, 3)
        return f"{sign}{whole}{frac}µs"
    if u < _SECOND:
        whole, frac = _split(u, 6)
        return f"{sign}{whole}{frac}ms"
    seconds, frac = _split(u, 9)
    minutes, s = divmod(seconds, 60)
    hours, m = divmod(minutes, 60)
    if hours:
        return f"{sign}{hours}h{m}m{s}{frac}s"
    if minutes:
        return f"{sign}{m}m{s}{frac}s"
    return f"{sign}{s}{frac}s"


def format_duration(seconds: float | timedelta) -> str:
    """Format a duration the compact way, e.g. ``1.5ms``, ``5s`` or ``2h3m4s``."""
    return _format_ns(_nanoseconds(seconds))


def _quote(s: str) -> str:
    out = ['"']
    for ch in s:
        if ch in _QUOTE_ESCAPES:
            out.append(_QUOTE_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x80:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) < 0x10000:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    out.append('"')
    return "".join(out)


@dataclass
class LogFormatterParams:
    """Everything a log formatter is handed about one finished request.

    ``latency`` is in seconds or a timedelta.
    """

    request: Any = None
    timestamp: datetime = field(default_factory=datetime.now)
    status_code: int = 0
    latency: float | timedelta = 0.0
    client_ip: str = ""
    method: str = ""
    path: str = ""
    error_message: str = ""
    is_term: bool = False
    body_size: int = 0
    keys: dict[str, Any] = field(default_factory=dict)

    def status_code_color(self) -> str:
        """Return the ANSI colour for the status code."""
        code = self.status_code
        if 200 <= code < 300:
            return GREEN
        if 300 <= code < 400:
            return WHITE
        if 400 <= code < 500:
            return YELLOW
        return RED

    def method_color(self) -> str:
        """Return the ANSI colour for the request method."""
        return _METHOD_COLORS.get(self.method, RESET)

    def reset_color(self) -> str:
        """Return the ANSI sequence that resets all attributes."""
        return RESET

    def is_output_color(self) -> bool:
        """Return True when the log line should be coloured."""
        mode = console_color_mode()
        return mode is ColorMode.FORCE or (mode is ColorMode.AUTO and self.is_term)


LogFormatter = Callable[[LogFormatterParams], str]


def default_log_formatter(params: LogFormatterParams) -> str:
    """Format one request as a single log line."""
    status_color = method_color = reset_color = ""
    if params.is_output_color():
        status_color = params.status_code_color()
        method_color = params.method_color()
        reset_color = params.reset_color()

    latency = _nanoseconds(params.latency)
    if latency > _MINUTE:
        latency -= latency % _SECOND

    timestamp = params.timestamp.strftime("%Y/%m/%d - %H:%M:%S")
    return (
        f"[TONIC] {timestamp} |{status_color} {params.status_code:3d} {reset_color}|"
        f" {_format_ns(latency):>13} | {params.client_ip:>15} |"
        f"{method_color} {params.method:<7} {reset_color} {_quote(params.path)}\n"
        f"{params.error_message}"
    )


@dataclass
class LoggerConfig:
    """Settings of the request logger.

    ``output`` of None means standard output; requests to ``skip_paths``
    are not logged.
    """

    formatter: LogFormatter = default_log_formatter
    output: Optional[TextIO] = None
    skip_paths: Sequence[str] = ()