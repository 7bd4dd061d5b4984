"""Utility helpers shared by the render settings loader."""

from __future__ import annotations

import re
import typing as typ

from notes_preview._constants import FRONT_MATTER_WILDCARD

from .models import SettingsError

TOC_LEVELS_PATTERN = re.compile(r"^\s*([1-6])\s*(?:-\s*([1-6]))?\s*$")
_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


def _normalize_keys(value: str | list[object] | None) -> tuple[str, ...]:
    """Normalize the front-matter allow-list into a tuple of key names.

    A bare ``"*"`` (or any list containing it) collapses to the wildcard; a
    string is split on commas and whitespace.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        segments = [segment for segment in re.split(r"[,\s]+", value) if segment]
    elif isinstance(value, list):
        segments = [str(segment).strip() for segment in value]
        segments = [segment for segment in segments if segment]
    else:
        msg = f"Front-matter keys must be a list or a string, got {value!r}."
        raise SettingsError(msg)
    if FRONT_MATTER_WILDCARD in segments:
        return (FRONT_MATTER_WILDCARD,)
    return tuple(dict.fromkeys(segments))


def _parse_toc_levels(value: object) -> tuple[int, int]:
    """Return ``(min, max)`` from ``"2-4"``, ``"3"``, ``[2, 4]`` or ``3``."""
    match value:
        case bool():
            pass
        case int() as level:
            return _checked_levels(level, level)
        case str() as text:
            parsed = TOC_LEVELS_PATTERN.match(text)
            if parsed:
                low = int(parsed.group(1))
                high = int(parsed.group(2) or low)
                return _checked_levels(low, high)
        case [int() as low, int() as high]:
            return _checked_levels(low, high)
        case _:
            pass
    msg = f"Unrecognised TOC levels {value!r}; expected e.g. '2-4' or [2, 4]."
    raise SettingsError(msg)


def _checked_levels(low: int, high: int) -> tuple[int, int]:
    if not 1 <= low <= high <= 6:
        msg = f"TOC levels must satisfy 1 <= min <= max <= 6, got {low}-{high}."
        raise SettingsError(msg)
    return low, high


def _as_bool(value: object, *, key: str, default: bool) -> bool:
    """Coerce YAML/env flag values into a bool, rejecting anything ambiguous."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    msg = f"Setting '{key}' must be a boolean, got {value!r}."
    raise SettingsError(msg)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _section(payload: typ.Mapping[str, typ.Any], key: str) -> dict[str, typ.Any]:
    """Return the nested mapping under ``key`` or an empty dict."""
    section = payload.get(key) or {}
    if not isinstance(section, dict):
        msg = f"Section '{key}' must be a mapping."
        raise SettingsError(msg)
    return section


__all__ = [
    "TOC_LEVELS_PATTERN",
    "_as_bool",
    "_normalize_keys",
    "_optional_str",
    "_parse_toc_levels",
    "_section",
]
