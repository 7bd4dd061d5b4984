"""Decide on and place the automatic table-of-contents marker."""

from __future__ import annotations

import re
import typing as typ

from notes_preview._constants import (
    AUTO_TOC_BLOCK,
    BLOG_FOLDER_NAMES,
    EXPLICIT_TOC_MARKER,
)

from .front_matter import match_front_matter

if typ.TYPE_CHECKING:
    from notes_preview.config import RenderSettings

HTML_HEADING_PATTERN = re.compile(r"<h[1-6][\s>]", re.IGNORECASE)


def has_toc_marker(markup: str) -> bool:
    """Return True when ``markup`` already carries a TOC directive.

    Both the plain ``[TOC]`` directive and the ``[TOC]: #`` reference form
    (which the automatic marker also uses) count.
    """
    return EXPLICIT_TOC_MARKER in markup


def has_heading(markup: str) -> bool:
    """Return True when ``markup`` shows any heading signal."""
    return "#" in markup or HTML_HEADING_PATTERN.search(markup) is not None


def is_blog_folder(parent_folder: str | None) -> bool:
    """Return True for the folder names blog posts conventionally live in."""
    return bool(parent_folder) and parent_folder in BLOG_FOLDER_NAMES


def should_insert_toc(
    markup: str,
    settings: RenderSettings,
    *,
    parent_folder: str | None = None,
    presentation: bool = False,
) -> bool:
    """Return True when the automatic TOC marker should be added.

    Parameters
    ----------
    markup : str
        Working markup.
    settings : RenderSettings
        Provides the global ``toc_enabled`` toggle.
    parent_folder : str, optional
        Name of the folder holding the note; ``_posts``, ``blog`` and
        ``post`` enable the TOC regardless of the setting.
    presentation : bool, optional
        Presentation mode never gets a TOC.
    """
    if presentation or has_toc_marker(markup) or not has_heading(markup):
        return False
    return is_blog_folder(parent_folder) or settings.toc_enabled


def toc_insertion_offset(markup: str) -> int:
    """Return the offset the marker goes to: after front matter, else 0."""
    match = match_front_matter(markup)
    return match.end() if match else 0


def insert_toc_marker(markup: str) -> str:
    """Insert the automatic marker unless a TOC directive is already present.

    Examples
    --------
    >>> insert_toc_marker("# Title")
    "[TOC]: # ''\\n  \\n# Title"
    >>> insert_toc_marker("---\\ntitle: x\\n---\\n# Title")
    "---\\ntitle: x\\n---\\n[TOC]: # ''\\n  \\n# Title"
    """
    if has_toc_marker(markup):
        return markup
    offset = toc_insertion_offset(markup)
    prefix = markup[:offset]
    if prefix and not prefix.endswith("\n"):
        prefix += "\n"
    return prefix + AUTO_TOC_BLOCK + markup[offset:]


__all__ = [
    "has_heading",
    "has_toc_marker",
    "insert_toc_marker",
    "is_blog_folder",
    "should_insert_toc",
    "toc_insertion_offset",
]
