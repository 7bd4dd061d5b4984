"""Typed dataclasses describing notes_preview render settings."""

from __future__ import annotations

import dataclasses as dc

from notes_preview._constants import (
    DEFAULT_ASSET_BASE_URL,
    DEFAULT_TOC_TITLE,
    FRONT_MATTER_WILDCARD,
)


class SettingsError(ValueError):
    """Raised when the render settings are invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class RenderSettings:
    """Resolved feature toggles for a single conversion.

    Attributes
    ----------
    math_enabled : bool
        Inject KaTeX assets for ``$`` math; when off, ``$`` is escaped.
    toc_enabled : bool
        Insert a table of contents into every document with headings.
    toc_levels : tuple[int, int]
        Inclusive ``(min, max)`` heading levels listed in the table of
        contents.
    toc_title : str
        Heading text shown above the table of contents.
    line_numbers : bool
        Enable the line-number plugin for code blocks.
    dark_mode : bool
        Prefer dark themes for code and diagrams.
    newline_is_paragraph : bool
        Treat every newline as a hard line break.
    word_wrap : bool
        Wrap long lines inside code blocks for this document.
    allowed_front_matter_keys : tuple[str, ...]
        Front-matter attributes shown above the body; ``("*",)`` shows all.
    asset_base_url : str
        Prefix for stylesheet and script URLs in the ``head`` output.
    """

    math_enabled: bool = True
    toc_enabled: bool = False
    toc_levels: tuple[int, int] = (1, 3)
    toc_title: str = DEFAULT_TOC_TITLE
    line_numbers: bool = False
    dark_mode: bool = False
    newline_is_paragraph: bool = False
    word_wrap: bool = False
    allowed_front_matter_keys: tuple[str, ...] = ()
    asset_base_url: str = DEFAULT_ASSET_BASE_URL

    def __post_init__(self) -> None:
        low, high = self.toc_levels
        if not 1 <= low <= high <= 6:
            msg = f"TOC levels must satisfy 1 <= min <= max <= 6, got {low}-{high}."
            raise SettingsError(msg)

    @property
    def shows_all_front_matter(self) -> bool:
        """Return True when the allow-list is the ``*`` wildcard."""
        return FRONT_MATTER_WILDCARD in self.allowed_front_matter_keys

    def allows_front_matter_key(self, name: str) -> bool:
        """Return True when ``name`` should appear in the front-matter block."""
        return self.shows_all_front_matter or name in self.allowed_front_matter_keys


__all__ = ["RenderSettings", "SettingsError"]
