"""Scan and substitute ``{{ scope.name }}`` front-matter tokens.

Tokens are recognised by a small scanner rather than a regular expression:
literal ``{{``, one space, a scope keyword, ``.``, an identifier made of
letters, digits, ``_`` or ``-``, one space and ``}}``. Anything else is copied
through untouched, so nested or unbalanced braces can never produce a partial
match.

Example
-------
>>> from notes_preview.converter.tokens import substitute_tokens
>>> substitute_tokens("By {{ post.author }}", {"author": ["Ann"]})
"By <span class='post-item-author'>Ann</span>"
"""

from __future__ import annotations

import dataclasses as dc
import re
import string
import typing as typ
from html import escape

from notes_preview._constants import (
    FRONT_MATTER_SCOPES,
    HTML_TOKEN_DELIMITER,
    HTML_TOKEN_ITEM,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TOKEN_OPEN = "{{ "
TOKEN_CLOSE = " }}"
SCOPE_SEPARATOR = "."
IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "_-")
EM_DASH_PATTERN = re.compile(r"(?<!-)---(?!-)")
EN_DASH_PATTERN = re.compile(r"(?<!-)--(?!-)")
TAG_SEPARATOR_PATTERN = re.compile(r",\s*")
TAGS_ATTRIBUTE = "tags"
QUOTE_CHARS = ("'", '"')


@dc.dataclass(frozen=True, slots=True)
class Token:
    """A scoped token located in a text.

    Attributes
    ----------
    scope : str
        Scope keyword, for example ``"post"``.
    name : str
        Attribute name following the scope.
    start : int
        Offset of the opening ``{{``.
    end : int
        Offset just past the closing ``}}``.
    """

    scope: str
    name: str
    start: int
    end: int


def _scan_identifier(text: str, position: int) -> int:
    """Return the offset where the identifier starting at ``position`` ends."""
    end = position
    while end < len(text) and text[end] in IDENTIFIER_CHARS:
        end += 1
    return end


def _read_token(text: str, start: int, scopes: cabc.Collection[str]) -> Token | None:
    """Read one token whose ``{{ `` opener sits at ``start``, or return None."""
    scope_start = start + len(TOKEN_OPEN)
    scope_end = _scan_identifier(text, scope_start)
    if scope_end == scope_start or not text.startswith(SCOPE_SEPARATOR, scope_end):
        return None
    scope = text[scope_start:scope_end]
    if scope not in scopes:
        return None
    name_start = scope_end + len(SCOPE_SEPARATOR)
    name_end = _scan_identifier(text, name_start)
    if name_end == name_start or not text.startswith(TOKEN_CLOSE, name_end):
        return None
    return Token(
        scope=scope,
        name=text[name_start:name_end],
        start=start,
        end=name_end + len(TOKEN_CLOSE),
    )


def scan_tokens(
    text: str, scopes: cabc.Collection[str] = FRONT_MATTER_SCOPES
) -> cabc.Iterator[Token]:
    """Yield every well-formed token in ``text`` from left to right.

    Parameters
    ----------
    text : str
        Markup or HTML to scan.
    scopes : Collection[str], optional
        Recognised scope keywords; defaults to ``("post",)``.

    Yields
    ------
    Token
        Tokens in document order; they never overlap.
    """
    position = 0
    while True:
        start = text.find(TOKEN_OPEN, position)
        if start < 0:
            return
        token = _read_token(text, start, scopes)
        if token is None:
            position = start + 1
            continue
        yield token
        position = token.end


def contains_token(
    text: str, scopes: cabc.Collection[str] = FRONT_MATTER_SCOPES
) -> bool:
    """Return True when ``text`` holds at least one scoped token."""
    return next(scan_tokens(text, scopes), None) is not None


def normalize_tag_values(values: cabc.Sequence[str]) -> list[str]:
    """Return the distinct tags in first-seen order.

    A lone raw entry is treated as a bracketed list and split on commas; a
    YAML sequence already holds one tag per value.

    Examples
    --------
    >>> normalize_tag_values(["[a, b, a]"])
    ['a', 'b']
    >>> normalize_tag_values(["x", "y", "x"])
    ['x', 'y']
    """
    if len(values) != 1:
        return list(dict.fromkeys(values))
    raw = values[0]
    raw = raw.removeprefix("[")
    raw = raw.removesuffix("]")
    parts = [part for part in TAG_SEPARATOR_PATTERN.split(raw) if part]
    return list(dict.fromkeys(parts))


def _strip_quotes(value: str) -> str:
    """Strip one layer of matching surrounding quotes."""
    if len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]:
        return value[1:-1]
    return value


def render_value(value: str) -> str:
    """Escape a raw attribute value and apply dash typography.

    Examples
    --------
    >>> render_value('"a---b"')
    'a&mdash;b'
    >>> render_value("a--b <c>")
    'a&ndash;b &lt;c&gt;'
    >>> render_value("a----b")
    'a----b'
    """
    text = escape(_strip_quotes(value), quote=True)
    text = EM_DASH_PATTERN.sub("&mdash;", text)
    text = EN_DASH_PATTERN.sub("&ndash;", text)
    return text.strip()


def render_attribute(
    name: str, values: cabc.Sequence[str], scope: str = FRONT_MATTER_SCOPES[0]
) -> str:
    """Render an attribute's values as item spans joined by delimiter spans."""
    if name == TAGS_ATTRIBUTE:
        values = normalize_tag_values(values)
    css_name = escape(name, quote=True)
    items = [
        HTML_TOKEN_ITEM.format(scope=scope, name=css_name, value=render_value(value))
        for value in values
    ]
    return HTML_TOKEN_DELIMITER.format(scope=scope, name=css_name).join(items)


def build_replacements(
    attributes: cabc.Mapping[str, cabc.Sequence[str]],
    scopes: cabc.Collection[str] = FRONT_MATTER_SCOPES,
) -> dict[tuple[str, str], str]:
    """Map each ``(scope, name)`` pair to its rendered replacement."""
    return {
        (scope, name): render_attribute(name, values, scope)
        for name, values in attributes.items()
        for scope in scopes
    }


def substitute_tokens(
    text: str,
    attributes: cabc.Mapping[str, cabc.Sequence[str]],
    scopes: cabc.Collection[str] = FRONT_MATTER_SCOPES,
    *,
    replacements: cabc.Mapping[tuple[str, str], str] | None = None,
) -> str:
    """Replace every known token in ``text`` with its rendered attribute.

    Parameters
    ----------
    text : str
        Body markup or front-matter container HTML.
    attributes : Mapping[str, Sequence[str]]
        Front-matter attributes in document order.
    scopes : Collection[str], optional
        Scope keywords the tokens may use.
    replacements : Mapping[tuple[str, str], str], optional
        Precomputed output of :func:`build_replacements`, so the body and the
        container can share one rendering pass.

    Returns
    -------
    str
        ``text`` with known tokens replaced; unknown tokens and everything
        else are copied verbatim. Replacement text is never rescanned.
    """
    if not attributes or TOKEN_OPEN not in text:
        return text
    if replacements is None:
        replacements = build_replacements(attributes, scopes)
    pieces: list[str] = []
    position = 0
    for token in scan_tokens(text, scopes):
        rendered = replacements.get((token.scope, token.name))
        if rendered is None:
            continue
        pieces.append(text[position : token.start])
        pieces.append(rendered)
        position = token.end
    if not pieces:
        return text
    pieces.append(text[position:])
    return "".join(pieces)


__all__ = [
    "Token",
    "build_replacements",
    "contains_token",
    "normalize_tag_values",
    "render_attribute",
    "render_value",
    "scan_tokens",
    "substitute_tokens",
]
