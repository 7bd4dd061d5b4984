"""Tests for the front-matter token scanner and attribute rendering."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from notes_preview.converter.tokens import (
    build_replacements,
    contains_token,
    normalize_tag_values,
    render_attribute,
    render_value,
    scan_tokens,
    substitute_tokens,
)


def test_scan_tokens_reports_scope_name_and_offsets() -> None:
    text = "a {{ post.title }} b {{ post.x-y_1 }}"
    tokens = list(scan_tokens(text))
    assert [(token.scope, token.name) for token in tokens] == [
        ("post", "title"),
        ("post", "x-y_1"),
    ]
    assert text[tokens[0].start : tokens[0].end] == "{{ post.title }}"


@pytest.mark.parametrize(
    "text",
    [
        "{{post.title}}",
        "{{  post.title }}",
        "{{ post.title  }}",
        "{{ site.title }}",
        "{{ post. }}",
        "{{ post.ti tle }}",
        "{{ post.title }",
    ],
)
def test_malformed_tokens_are_ignored(text: str) -> None:
    assert not contains_token(text)


def test_nested_braces_match_only_the_inner_token() -> None:
    text = "{{ {{ post.a }} }}"
    tokens = list(scan_tokens(text))
    assert [(token.start, token.end) for token in tokens] == [(3, 15)]


def test_tag_list_is_split_and_deduplicated() -> None:
    assert normalize_tag_values(["[a, b, a]"]) == ["a", "b"]
    assert normalize_tag_values(["a,b,,c"]) == ["a", "b", "c"]
    assert normalize_tag_values(["a", "b", "a"]) == ["a", "b"]


def test_tags_render_two_spans_in_first_occurrence_order() -> None:
    html = render_attribute("tags", ["[a, b, a]"])
    soup = BeautifulSoup(html, "html.parser")
    items = soup.select("span.post-item-tags")
    assert [item.get_text() for item in items] == ["a", "b"]
    assert len(soup.select("span.post-delimiter-tags.delimiter")) == 1


def test_non_tag_attributes_keep_every_value() -> None:
    html = render_attribute("author", ["Ann", "Ann"])
    assert html.count("<span class='post-item-author'>Ann</span>") == 2


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("a---b", "a&mdash;b"),
        ("a--b", "a&ndash;b"),
        ("a----b", "a----b"),
        ("'quoted'", "quoted"),
        ("\"it's\"", "it&#x27;s"),
        ("'mismatched\"", "&#x27;mismatched&quot;"),
        ("  padded  ", "padded"),
        ("<b>&</b>", "&lt;b&gt;&amp;&lt;/b&gt;"),
    ],
)
def test_render_value(raw: str, expected: str) -> None:
    assert render_value(raw) == expected


def test_dash_conversion_produces_entities() -> None:
    assert "&mdash;" in render_value("a---b")
    assert "&ndash;" in render_value("a--b")
    converted = render_value("a----b")
    assert "&mdash;" not in converted
    assert "&ndash;" not in converted


def test_substitute_tokens_replaces_every_occurrence() -> None:
    attributes = {"title": ["Notes"], "tags": ["[x]"]}
    text = "{{ post.title }} / {{ post.title }} / {{ post.unknown }}"
    result = substitute_tokens(text, attributes)
    assert result.count("<span class='post-item-title'>Notes</span>") == 2
    assert "{{ post.unknown }}" in result


def test_substitution_is_single_pass_and_idempotent() -> None:
    attributes = {"a": ["{{ post.b }}"], "b": ["B"]}
    once = substitute_tokens("{{ post.a }}", attributes)
    assert once == "<span class='post-item-a'>{{ post.b }}</span>"
    replacements = build_replacements({"title": ["T"]})
    done = substitute_tokens("{{ post.title }}", {"title": ["T"]})
    assert (
        substitute_tokens(done, {"title": ["T"]}, replacements=replacements) == done
    )


def test_substitute_tokens_without_attributes_is_identity() -> None:
    text = "{{ post.title }}"
    assert substitute_tokens(text, {}) is text


def test_custom_scopes() -> None:
    result = substitute_tokens(
        "{{ page.title }} {{ post.title }}", {"title": ["T"]}, ("page",)
    )
    assert result == "<span class='page-item-title'>T</span> {{ post.title }}"
