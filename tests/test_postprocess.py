"""Tests for footnote cleanup and presentation slide segmentation."""

from __future__ import annotations

from bs4 import BeautifulSoup

from notes_preview.converter.postprocess import (
    fix_footnotes,
    present_slides,
    render_slides,
    segment_slides,
)

BACKREF = '<a class="footnote-backref" href="#fnref:1" title="Back">&#8617;</a>'


def test_fix_footnotes_unwraps_standalone_backref() -> None:
    html = f"<li><ul><li>x</li></ul>\n<p>{BACKREF}</p></li>"
    fixed = fix_footnotes(html)
    assert "<p><a" not in fixed
    assert fixed.endswith('title="Back"> &#8617;</a></li>')


def test_fix_footnotes_spaces_inline_backref() -> None:
    fixed = fix_footnotes(f"<p>note&#160;{BACKREF}</p>")
    assert '> &#8617;</a>' in fixed


def test_fix_footnotes_ignores_html_without_footnotes() -> None:
    html = "<p>&#8617; plain</p>"
    assert fix_footnotes(html) is html


def test_two_rules_make_three_slides() -> None:
    html = "<h1>Deck</h1>\n<hr />\n<p>one</p>\n<hr />\n<h1>Part</h1>\n"
    rendered = render_slides(segment_slides(html))
    soup = BeautifulSoup(rendered, "html.parser")
    slides = soup.select("div.slide")
    assert [slide["class"][0] for slide in slides] == [
        "slide_p1",
        "slide_p2",
        "slide_p3",
    ]
    titles = [
        slide for slide in slides if "slide_type_title" in slide.get("class", [])
    ]
    assert [slide["class"][0] for slide in titles] == ["slide_p1", "slide_p3"]
    assert all(slide.find("div", class_="slide_body") for slide in slides)
    assert rendered.count("<div") == rendered.count("</div>") == 6


def test_only_top_level_headings_make_title_slides() -> None:
    segments = segment_slides("<h2>Sub</h2><hr /><p>x</p><h1>late</h1>")
    assert [segment.is_title for segment in segments] == [False, False]


def test_blank_leading_segment_is_dropped() -> None:
    segments = segment_slides("\n<hr />\n<h1>First</h1>\n<hr />\n<p>Second</p>")
    assert len(segments) == 2
    assert segments[0].is_title
    assert "<!-- Presentation slide 1 -->" in render_slides(segments)


def test_no_rules_leaves_html_unwrapped() -> None:
    html = "<h1>Only</h1>\n<p>slide</p>"
    assert segment_slides(html) == []
    assert present_slides(html) == html
