"""Extract YAML front matter and build the front-matter display block.

The front-matter block must open the note with a ``---`` line and close with a
``---`` or ``...`` line. Values are read with ruamel's base loader so every
scalar stays the raw string the author typed (``2024-01-01`` is not turned
into a date, ``yes`` is not turned into a bool).
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from html import escape

from loguru import logger
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from notes_preview._constants import (
    FRONT_MATTER_DELIMITER,
    FRONT_MATTER_SCOPES,
    HTML_FRONT_MATTER_CONTAINER_END,
    HTML_FRONT_MATTER_CONTAINER_START,
    HTML_FRONT_MATTER_ITEM_END,
    HTML_FRONT_MATTER_ITEM_START,
)

from .tokens import contains_token

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from notes_preview.config import RenderSettings

FRONT_MATTER_PATTERN = re.compile(
    r"\A(?P<open>-{3}[ \t]*)\r?\n"
    r"(?:(?P<body>.*?)\r?\n)??"
    r"(?P<close>[-.]{3}[ \t]*)(?:\r?\n|\Z)",
    re.DOTALL,
)


@dc.dataclass(frozen=True, slots=True)
class FrontMatter:
    """Attributes read from the front matter and the unresolved display block.

    Attributes
    ----------
    attributes : dict[str, list[str]]
        Attribute name to raw values, in document order.
    container : str
        One item ``div`` per allowed attribute, each holding an unresolved
        ``{{ post.<name> }}`` token; empty when nothing is shown.
    shown : tuple[str, ...]
        Names of the attributes the container displays, in document order.
    """

    attributes: dict[str, list[str]] = dc.field(default_factory=dict)
    container: str = ""
    shown: tuple[str, ...] = ()


def match_front_matter(markup: str) -> re.Match[str] | None:
    """Return the match for a leading front-matter block, if any."""
    return FRONT_MATTER_PATTERN.match(markup)


def split_front_matter(markup: str) -> tuple[str, str]:
    """Split ``markup`` into ``(front_matter_block, body)``.

    The block includes both delimiter lines and the newline after the closing
    delimiter; it is empty when the note has no front matter.

    Examples
    --------
    >>> split_front_matter("---\\ntitle: x\\n---\\nBody")
    ('---\\ntitle: x\\n---\\n', 'Body')
    >>> split_front_matter("Body")
    ('', 'Body')
    """
    match = match_front_matter(markup)
    if match is None:
        return "", markup
    return match.group(0), markup[match.end() :]


def _raw_values(value: object) -> list[str]:
    """Flatten a loaded YAML value into its raw string values."""
    match value:
        case None:
            return [""]
        case str():
            return [value]
        case list():
            return [item for item in value if isinstance(item, str)]
        case _:
            return []


def extract_front_matter(markup: str) -> dict[str, list[str]]:
    """Parse the leading front-matter block into ordered raw values.

    Parameters
    ----------
    markup : str
        Full note text.

    Returns
    -------
    dict[str, list[str]]
        Attribute name to raw string values in document order. Scalars become
        one-element lists, sequences keep their string items, and nested
        mappings carry no values. Returns an empty dict when the note has no
        front matter or the block is not valid YAML.
    """
    match = match_front_matter(markup)
    if match is None:
        return {}
    loader = YAML(typ="base")
    loader.allow_duplicate_keys = True
    try:
        loaded = loader.load(match.group("body") or "")
    except YAMLError as exc:
        logger.debug("ignoring unparseable front matter: {}", exc)
        return {}
    if not isinstance(loaded, dict):
        return {}
    return {str(name): _raw_values(value) for name, value in loaded.items()}


def _container_item(name: str, content: str) -> str:
    return (
        HTML_FRONT_MATTER_ITEM_START.format(name=escape(name, quote=True))
        + content
        + "\n"
        + HTML_FRONT_MATTER_ITEM_END
        + "\n"
    )


def shown_keys(
    attributes: cabc.Mapping[str, cabc.Sequence[str]], settings: RenderSettings
) -> tuple[str, ...]:
    """Return the attribute names the allow-list displays, in document order."""
    return tuple(
        name for name in attributes if settings.allows_front_matter_key(name)
    )


def build_container(
    attributes: cabc.Mapping[str, cabc.Sequence[str]],
    settings: RenderSettings,
    scope: str = FRONT_MATTER_SCOPES[0],
) -> str:
    """Return one item ``div`` per allowed attribute with an unresolved token."""
    return "".join(
        _container_item(name, f"{{{{ {scope}.{name} }}}}")
        for name in shown_keys(attributes, settings)
    )


def fill_container(
    names: cabc.Iterable[str],
    replacements: cabc.Mapping[tuple[str, str], str],
    scope: str = FRONT_MATTER_SCOPES[0],
) -> str:
    """Return the item ``div`` elements with each value resolved by key.

    Lookups go straight to ``replacements``, so keys the token scanner would
    not accept (``last modified``, ``título``) still render their values.
    """
    return "".join(
        _container_item(name, replacements[(scope, name)]) for name in names
    )


def wrap_container(container: str) -> str:
    """Wrap resolved item ``div`` elements in the outer front-matter block."""
    if not container:
        return ""
    return (
        HTML_FRONT_MATTER_CONTAINER_START
        + container
        + HTML_FRONT_MATTER_CONTAINER_END
        + "\n"
    )


def process_front_matter(
    markup: str,
    settings: RenderSettings,
    *,
    presentation: bool = False,
    scopes: cabc.Collection[str] = FRONT_MATTER_SCOPES,
) -> FrontMatter:
    """Extract attributes and build the container when the note calls for it.

    Extraction only happens when ``markup`` starts with ``---``, presentation
    mode is off, and either the allow-list is non-empty or a scoped token
    appears in the text. Otherwise an empty :class:`FrontMatter` is returned
    without parsing anything.
    """
    if presentation or not markup.startswith(FRONT_MATTER_DELIMITER):
        return FrontMatter()
    shows_keys = bool(settings.allowed_front_matter_keys)
    if not shows_keys and not contains_token(markup, scopes):
        return FrontMatter()
    attributes = extract_front_matter(markup)
    shown = shown_keys(attributes, settings) if shows_keys else ()
    container = build_container(attributes, settings) if shown else ""
    logger.debug(
        "front matter attributes {} (container items: {})",
        list(attributes),
        len(shown),
    )
    return FrontMatter(attributes=attributes, container=container, shown=shown)


__all__ = [
    "FRONT_MATTER_PATTERN",
    "FrontMatter",
    "build_container",
    "extract_front_matter",
    "fill_container",
    "match_front_matter",
    "process_front_matter",
    "shown_keys",
    "split_front_matter",
    "wrap_container",
]
