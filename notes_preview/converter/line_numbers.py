"""Stamp rendered block elements with the source line they came from.

The preview uses the ``line`` attribute to keep the rendered pane scrolled to
the line the cursor is on. python-markdown does not track source offsets, so
:class:`SourceLineIndex` recovers them by scanning the source forward for each
element's leading word, in document order.
"""

from __future__ import annotations

import re
import typing as typ

from markdown.treeprocessors import Treeprocessor

from .front_matter import match_front_matter

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Element = typ.Any
    Markdown = typ.Any

LineResolver = typ.Callable[[Element], "int | None"]

LINE_ATTRIBUTE = "line"
BLOCK_TAGS = frozenset(
    {
        "p",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "li",
        "blockquote",
        "pre",
        "table",
        "tr",
        "hr",
        "dt",
        "dd",
        "div",
        "details",
    }
)
STASH_PLACEHOLDER_PATTERN = re.compile("\x02[^\x03]*\x03")
WORD_PATTERN = re.compile(r"\w+")
THEMATIC_BREAK_PATTERN = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")


class SourceLineIndex:
    """Resolve rendered elements to 1-based source line numbers.

    Elements must be resolved in document order. Each lookup searches from
    the line after the previous match, so sibling blocks that open with the
    same word resolve to successive lines. An element nested inside the
    previous match (a paragraph in a list item or quote) may share its line.

    Parameters
    ----------
    source : str
        The exact text handed to the Markdown engine.
    line_shift : tuple[int, int], optional
        ``(first_line, count)`` of lines injected by the pipeline; matches
        after them are shifted back and matches inside them resolve to None.
    """

    def __init__(
        self, source: str, *, line_shift: tuple[int, int] | None = None
    ) -> None:
        self._lines = source.split("\n")
        self._line_shift = line_shift
        front_matter = match_front_matter(source)
        self._cursor = front_matter.group(0).count("\n") if front_matter else 0
        self._anchor: Element | None = None
        self._anchor_index = self._cursor

    def __call__(self, element: Element) -> int | None:
        """Return the source line for ``element`` or None when unknown."""
        start = self._anchor_index if self._nested(element) else self._cursor
        if element.tag == "hr":
            index = self._find(THEMATIC_BREAK_PATTERN.match, start)
        else:
            probe = _leading_word(element)
            if probe is None:
                return None
            index = self._find(lambda line: probe in line.casefold(), start)
        if index is None:
            return None
        self._anchor = element
        self._anchor_index = index
        self._cursor = max(self._cursor, index + 1)
        return self._adjust(index + 1)

    def _nested(self, element: Element) -> bool:
        if self._anchor is None:
            return False
        return any(
            child is element
            for child in self._anchor.iter()
            if child is not self._anchor
        )

    def _find(
        self, predicate: cabc.Callable[[str], object], start: int
    ) -> int | None:
        for index in range(start, len(self._lines)):
            if predicate(self._lines[index]):
                return index
        return None

    def _adjust(self, line: int) -> int | None:
        if self._line_shift is None:
            return line
        first, count = self._line_shift
        if line < first:
            return line
        if line < first + count:
            return None
        return line - count


def _leading_word(element: Element) -> str | None:
    """Return the first word of the element's text, ignoring stash markers."""
    for fragment in element.itertext():
        text = STASH_PLACEHOLDER_PATTERN.sub("", fragment)
        word = WORD_PATTERN.search(text)
        if word:
            return word.group(0).casefold()
    return None


class LineNumberTreeprocessor(Treeprocessor):
    """Set the ``line`` attribute on block elements via a resolver callback."""

    def __init__(self, md: Markdown, resolver: LineResolver) -> None:
        super().__init__(md)
        self.resolver = resolver

    def run(self, root: Element) -> None:
        """Annotate every block-level element below ``root`` in document order."""
        for element in root.iter():
            if element is root or element.tag not in BLOCK_TAGS:
                continue
            line = self.resolver(element)
            if line is not None:
                element.set(LINE_ATTRIBUTE, str(line))


__all__ = [
    "BLOCK_TAGS",
    "LINE_ATTRIBUTE",
    "LineNumberTreeprocessor",
    "LineResolver",
    "SourceLineIndex",
]
