"""Clean up rendered HTML: footnote back-references and presentation slides."""

from __future__ import annotations

import re
import typing as typ

from notes_preview._constants import (
    HTML_SLIDE_END,
    HTML_SLIDE_START,
    HTML_TITLE_SLIDE_START,
)

from .models import SlideSegment

if typ.TYPE_CHECKING:
    import collections.abc as cabc

FOOTNOTE_BACKREF_CLASS = "footnote-backref"
BACKREF_ANCHOR = r'<a\b[^>]*\bclass="footnote-backref"[^>]*>'
BACKREF_PARAGRAPH_PATTERN = re.compile(
    rf"\n<p\b[^>]*>({BACKREF_ANCHOR}(?:&#8617;|↩)[^<]*</a>)</p>"
)
BACKREF_GLYPH_PATTERN = re.compile(rf"({BACKREF_ANCHOR})(&#8617;|↩)")
HORIZONTAL_RULE_PATTERN = re.compile(r"<hr\b[^>]*>")
TITLE_SLIDE_PATTERN = re.compile(r"\s*<h1[\s>]")


def fix_footnotes(html: str) -> str:
    """Tidy footnote back-references in rendered ``html``.

    A back-reference that the engine put in a paragraph of its own (after a
    list or code block in the footnote) is pulled up next to the preceding
    content, and a space is placed before the back-reference glyph.

    Examples
    --------
    >>> fix_footnotes('<p>x&#160;<a class="footnote-backref" href="#r">&#8617;</a></p>')
    '<p>x&#160;<a class="footnote-backref" href="#r"> &#8617;</a></p>'
    >>> fix_footnotes("<p>no notes</p>")
    '<p>no notes</p>'
    """
    if FOOTNOTE_BACKREF_CLASS not in html:
        return html
    html = BACKREF_PARAGRAPH_PATTERN.sub(r" \1", html)
    return BACKREF_GLYPH_PATTERN.sub(r"\1 \2", html)


def segment_slides(html: str) -> list[SlideSegment]:
    """Split rendered ``html`` into slides at each ``<hr>`` element.

    Returns an empty list when the HTML holds no horizontal rule. Content
    before the first rule becomes the first slide unless it is blank.

    Examples
    --------
    >>> [s.is_title for s in segment_slides("<h1>A</h1><hr /><p>b</p>")]
    [True, False]
    >>> segment_slides("<p>single</p>")
    []
    """
    parts = HORIZONTAL_RULE_PATTERN.split(html)
    if len(parts) == 1:
        return []
    if not parts[0].strip():
        parts = parts[1:]
    return [
        SlideSegment(html=part, is_title=TITLE_SLIDE_PATTERN.match(part) is not None)
        for part in parts
    ]


def render_slides(segments: cabc.Sequence[SlideSegment]) -> str:
    """Wrap each segment in a numbered slide ``div``, counting from 1."""
    pieces: list[str] = []
    for number, segment in enumerate(segments, start=1):
        start = HTML_TITLE_SLIDE_START if segment.is_title else HTML_SLIDE_START
        pieces.append(start.format(number=number))
        pieces.append(segment.html)
        pieces.append(HTML_SLIDE_END)
    return "".join(pieces)


def present_slides(html: str) -> str:
    """Return ``html`` laid out as slides, or unchanged when it has no rules."""
    segments = segment_slides(html)
    if not segments:
        return html
    return render_slides(segments)


__all__ = [
    "fix_footnotes",
    "present_slides",
    "render_slides",
    "segment_slides",
]
