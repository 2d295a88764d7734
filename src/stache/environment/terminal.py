"""ANSI styling of compile error diagnostics.

Each part of a diagnostic has a *role* (error code, location, secondary
text, docs link) with a fixed style. Styling is applied only when the output
stream is a terminal, and honors the NO_COLOR (https://no-color.org/) and
FORCE_COLOR conventions; FORCE_COLOR wins when both are set.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_RESET = "\033[0m"

_SGR = {
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "bright_red": "\033[91m",
    "bright_blue": "\033[94m",
}

Role = Literal["code", "location", "secondary", "link"]

_ROLE_STYLES: dict[str, tuple[str, ...]] = {
    "code": ("bright_red", "bold"),
    "location": ("cyan",),
    "secondary": ("dim",),
    "link": ("bright_blue",),
}

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stderr.isatty()


_USE_COLORS = _should_use_colors()


def supports_color() -> bool:
    return _USE_COLORS


def refresh_color_support() -> bool:
    """Re-read the environment, e.g. after NO_COLOR changed at runtime."""
    global _USE_COLORS
    _USE_COLORS = _should_use_colors()
    return _USE_COLORS


def colorize(text: str, *styles: str) -> str:
    """Wrap ``text`` in the SGR sequences of ``styles``.

    Unknown style names are ignored. Returns ``text`` unchanged when colors
    are off or no known style is given.
    """
    if not _USE_COLORS:
        return text
    prefix = "".join(_SGR[name] for name in styles if name in _SGR)
    return f"{prefix}{text}{_RESET}" if prefix else text


def styled(role: Role, text: str) -> str:
    """Style ``text`` for its role in a diagnostic."""
    return colorize(text, *_ROLE_STYLES[role])


def strip_colors(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


def format_error_header(code: str | None, message: str) -> str:
    """First line of a diagnostic: ``S-PAR-002: Unmatched closing tag``."""
    if code:
        return f"{styled('code', code)}: {message}"
    return message


def format_location_line(location: str) -> str:
    return f"  --> {styled('location', location)}"


def format_docs_line(url: str) -> str:
    return f"  {styled('secondary', 'Docs:')} {styled('link', url)}"
