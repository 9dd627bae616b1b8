"""Timestamped logging helpers."""

from __future__ import annotations

import builtins
import re
import sys
import time
from typing import Any


_LEVELS = ("DEEP", "DEBUG", "INFO", "WARN", "ERROR")
_LEVEL_RANK = {name: rank for rank, name in enumerate(_LEVELS)}

# Up to two leading tags: "[SYSTEM][LEVEL] msg" or "[LEVEL][SYSTEM] msg".
_TAGS = re.compile(r"^\s*\[([^\]\[]+)\](?:\[([^\]\[]+)\])?\s*(.*)$", re.DOTALL)


def _format_message(message: str) -> tuple[str, str | None]:
    """Return the line as ``[SYSTEM][LEVEL] msg`` plus its level, if any."""
    match = _TAGS.match(message)
    if not match:
        return f"[APP] {message}" if message else "[APP]", None
    first, second, rest = match.group(1).strip(), match.group(2), match.group(3)
    if first.upper() in _LEVEL_RANK:
        level, system = first.upper(), (second or "APP").strip()
    else:
        system, level = first, second.strip().upper() if second else None
    suffix = f" {rest}" if rest else ""
    if level:
        return f"[{system}][{level}]{suffix}", level
    return f"[{system}]{suffix}", None


def _threshold() -> int:
    from utils.settings_store import get_settings

    level = str(get_settings().get("log_level", "INFO")).upper()
    return _LEVEL_RANK.get(level, _LEVEL_RANK["INFO"])


def tprint(*args: Any, **kwargs: Any) -> None:
    """Print to stderr with a timestamp prefix and normalized tag order.

    Lines tagged with a level below the configured ``log_level`` are dropped.
    """
    message = " ".join(str(arg) for arg in args)
    formatted, level = _format_message(message)
    if level in _LEVEL_RANK and _LEVEL_RANK[level] < _threshold():
        return
    kwargs.setdefault("file", sys.stderr)
    timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
    builtins.print(f"[{timestamp}]{formatted}", **kwargs)


def log(system: str, message: str, variant: str | None = None) -> None:
    """Log with explicit system and optional variant."""
    if variant:
        tprint(f"[{system}][{variant}] {message}")
    else:
        tprint(f"[{system}] {message}")
