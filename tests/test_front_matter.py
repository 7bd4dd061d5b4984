"""Tests for front-matter extraction and the front-matter display block."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup
from pytest_mock import MockerFixture

from notes_preview.config import RenderSettings
from notes_preview.converter.front_matter import (
    build_container,
    extract_front_matter,
    fill_container,
    process_front_matter,
    split_front_matter,
    wrap_container,
)

NOTE = """---
title: Weekly notes
date: 2024-01-01
draft: yes
tags: [a, b]
author:
nested:
  key: value
---
Body {{ post.title }}
"""


def test_extract_keeps_raw_strings_in_document_order() -> None:
    attributes = extract_front_matter(NOTE)
    assert list(attributes) == ["title", "date", "draft", "tags", "author", "nested"]
    assert attributes["title"] == ["Weekly notes"]
    assert attributes["date"] == ["2024-01-01"]
    assert attributes["draft"] == ["yes"]
    assert attributes["tags"] == ["a", "b"]
    assert attributes["author"] == [""]
    assert attributes["nested"] == []


def test_dot_terminator_closes_block() -> None:
    assert extract_front_matter("---\ntitle: x\n...\nbody") == {"title": ["x"]}


def test_empty_block() -> None:
    assert split_front_matter("---\n---\nbody") == ("---\n---\n", "body")
    assert extract_front_matter("---\n---\nbody") == {}


def test_unparseable_front_matter_yields_empty_map() -> None:
    assert extract_front_matter("---\ntitle: [unclosed\n---\nbody") == {}


def test_unterminated_block_is_not_front_matter() -> None:
    assert split_front_matter("---\ntitle: x\nbody") == ("", "---\ntitle: x\nbody")


def test_duplicate_keys_do_not_fail_extraction() -> None:
    attributes = extract_front_matter("---\na: 1\na: 2\nb: 3\n---\n")
    assert list(attributes) == ["a", "b"]
    assert attributes["a"] in (["1"], ["2"])


def test_processing_is_a_no_op_without_leading_delimiter() -> None:
    markup = "Intro\n---\ntitle: x\n---\n{{ post.title }}"
    settings = RenderSettings(allowed_front_matter_keys=("*",))
    result = process_front_matter(markup, settings)
    assert result.attributes == {}
    assert result.container == ""


def test_processing_skips_extraction_without_keys_or_tokens(
    mocker: MockerFixture,
) -> None:
    spy = mocker.patch("notes_preview.converter.front_matter.extract_front_matter")
    result = process_front_matter("---\ntitle: x\n---\nbody", RenderSettings())
    spy.assert_not_called()
    assert result.attributes == {}


def test_presentation_mode_disables_extraction() -> None:
    settings = RenderSettings(allowed_front_matter_keys=("*",))
    result = process_front_matter(NOTE, settings, presentation=True)
    assert result.attributes == {}


def test_token_in_body_triggers_extraction_without_container() -> None:
    result = process_front_matter(NOTE, RenderSettings())
    assert result.attributes["title"] == ["Weekly notes"]
    assert result.container == ""


def test_container_lists_allowed_keys_in_map_order() -> None:
    settings = RenderSettings(allowed_front_matter_keys=("tags", "title"))
    result = process_front_matter(NOTE, settings)
    soup = BeautifulSoup(result.container, "html.parser")
    items = soup.select("div.front-matter-item")
    assert [item["class"][1] for item in items] == [
        "front-matter-container-title",
        "front-matter-container-tags",
    ]
    assert items[0].get_text(strip=True) == "{{ post.title }}"


def test_wildcard_lists_every_key() -> None:
    settings = RenderSettings(allowed_front_matter_keys=("*",))
    container = build_container(extract_front_matter(NOTE), settings)
    assert container.count("front-matter-item") == 6


def test_fill_container_looks_values_up_by_key() -> None:
    replacements = {("post", "last modified"): "<span>today</span>"}
    container = fill_container(("last modified",), replacements)
    soup = BeautifulSoup(container, "html.parser")
    item = soup.find("div", class_="front-matter-item")
    assert item.span.get_text() == "today"
    assert "{{" not in container


def test_process_front_matter_records_shown_keys() -> None:
    settings = RenderSettings(allowed_front_matter_keys=("tags", "title"))
    assert process_front_matter(NOTE, settings).shown == ("title", "tags")


def test_wrap_container() -> None:
    assert wrap_container("") == ""
    wrapped = wrap_container("<div>x</div>\n")
    assert wrapped.startswith("<div class='front-matter-container'>")
    assert wrapped.endswith("</div>\n")
