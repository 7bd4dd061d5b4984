"""Load render settings YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from loguru import logger
from ruamel.yaml import YAML

from notes_preview._constants import DEFAULT_ASSET_BASE_URL, DEFAULT_TOC_TITLE

from .helpers import (
    _as_bool,
    _normalize_keys,
    _optional_str,
    _parse_toc_levels,
    _section,
)
from .models import RenderSettings, SettingsError


def load_render_settings(path: Path) -> RenderSettings:
    """Load the YAML file describing preview feature toggles.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML settings file (for example,
        ``preview.yaml``).

    Returns
    -------
    RenderSettings
        Frozen settings ready to pass to the converter.

    Raises
    ------
    FileNotFoundError
        If the settings file does not exist at ``path``.
    SettingsError
        If the top-level YAML structure is not a mapping or a value has the
        wrong shape (for example, TOC levels outside 1-6).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from notes_preview.config import load_render_settings
    >>> settings = load_render_settings(Path("preview.yaml"))  # doctest: +SKIP
    >>> settings.toc_levels  # doctest: +SKIP
    (2, 4)
    """
    if not path.exists():
        msg = f"Settings file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SettingsError(msg)
    settings = settings_from_mapping(loaded)
    logger.debug("loaded render settings from {}: {}", path, settings)
    return settings


def settings_from_mapping(raw: typ.Mapping[str, typ.Any]) -> RenderSettings:
    """Build RenderSettings from an already parsed mapping.

    Missing keys fall back to the RenderSettings defaults.
    """
    defaults = RenderSettings()
    toc = _section(raw, "toc")
    front_matter = _section(raw, "front_matter")

    levels_raw = toc.get("levels")
    toc_levels = (
        _parse_toc_levels(levels_raw) if levels_raw is not None else defaults.toc_levels
    )

    return RenderSettings(
        math_enabled=_as_bool(raw.get("math"), key="math", default=defaults.math_enabled),
        toc_enabled=_as_bool(
            toc.get("enabled"), key="toc.enabled", default=defaults.toc_enabled
        ),
        toc_levels=toc_levels,
        toc_title=_optional_str(toc.get("title")) or DEFAULT_TOC_TITLE,
        line_numbers=_as_bool(
            raw.get("line_numbers"), key="line_numbers", default=defaults.line_numbers
        ),
        dark_mode=_as_bool(
            raw.get("dark_mode"), key="dark_mode", default=defaults.dark_mode
        ),
        newline_is_paragraph=_as_bool(
            raw.get("newline_is_paragraph"),
            key="newline_is_paragraph",
            default=defaults.newline_is_paragraph,
        ),
        word_wrap=_as_bool(
            raw.get("word_wrap"), key="word_wrap", default=defaults.word_wrap
        ),
        allowed_front_matter_keys=_normalize_keys(front_matter.get("keys")),
        asset_base_url=_optional_str(raw.get("asset_base_url"))
        or DEFAULT_ASSET_BASE_URL,
    )


__all__ = ["load_render_settings", "settings_from_mapping"]
