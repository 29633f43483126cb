"""Severity levels, their ordering, and their console styles.

Ordering and colors are kept as lookup tables so the router and the
pretty renderer never branch on a severity name.
"""

from collections.abc import Callable
from enum import Enum


class Severity(str, Enum):
    """Record severities, lowest first."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    ALERT = "alert"


MUTE = "mute"

SEVERITY_ORDER: dict[str, int] = {severity.value: index for index, severity in enumerate(Severity)}


def _ansi(open_code: str, close_code: str) -> Callable[[str], str]:
    def style(text: str) -> str:
        return f"{open_code}{text}{close_code}"

    return style


grey = _ansi("\x1b[90m", "\x1b[39m")
green = _ansi("\x1b[32m", "\x1b[39m")
yellow = _ansi("\x1b[33m", "\x1b[39m")
red = _ansi("\x1b[31m", "\x1b[39m")
inverse_red = _ansi("\x1b[7m\x1b[31m", "\x1b[39m\x1b[27m")

SEVERITY_STYLES: dict[str, Callable[[str], str]] = {
    Severity.DEBUG.value: grey,
    Severity.INFO.value: green,
    Severity.WARNING.value: yellow,
    Severity.ERROR.value: red,
    Severity.ALERT.value: inverse_red,
}


def plain(text: str) -> str:
    """Identity style for severities without a color."""
    return text
