"""Behaviour tests for presentation slide segmentation.

The scenarios in ``features/presentation_slides.feature`` convert beamer notes
through ``convert_markup`` and check the slide wrappers in the body, including
that presentation mode wins over the blog-folder table-of-contents heuristic.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from notes_preview.config import RenderSettings
from notes_preview.converter import RenderResult, convert_markup

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "presentation_slides.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {"settings": RenderSettings()}


@given("a beamer note with two horizontal rules")
def given_deck_with_rules(scenario_state: dict[str, object]) -> None:
    scenario_state["markup"] = (
        "---\nclass: beamer\n---\n"
        "# Welcome\n\n---\n\n"
        "Agenda items\n\n---\n\n"
        "# Questions\n"
    )


@given("a beamer note without horizontal rules")
def given_deck_without_rules(scenario_state: dict[str, object]) -> None:
    scenario_state["markup"] = "---\nclass:beamer\n---\n# Only slide\n\nText\n"


@given("the table of contents is enabled for blog folders")
def given_toc_enabled(scenario_state: dict[str, object]) -> None:
    scenario_state["settings"] = RenderSettings(toc_enabled=True)


@when("I convert the note from a blog folder")
def when_convert_from_blog(scenario_state: dict[str, object]) -> None:
    scenario_state["result"] = convert_markup(
        typ.cast("str", scenario_state["markup"]),
        typ.cast("RenderSettings", scenario_state["settings"]),
        document_path="site/_posts/deck.md",
    )


@when("I convert the note")
def when_convert(scenario_state: dict[str, object]) -> None:
    scenario_state["result"] = convert_markup(
        typ.cast("str", scenario_state["markup"]),
        typ.cast("RenderSettings", scenario_state["settings"]),
    )


def _soup(scenario_state: dict[str, object]) -> BeautifulSoup:
    result = typ.cast("RenderResult", scenario_state["result"])
    return BeautifulSoup(result.body, "html.parser")


@then("the body holds three numbered slides")
def then_three_slides(scenario_state: dict[str, object]) -> None:
    slides = _soup(scenario_state).select("div.slide")
    assert [slide["class"][0] for slide in slides] == [
        "slide_p1",
        "slide_p2",
        "slide_p3",
    ], "expected three slides numbered from 1"
    assert all(slide.find("div", class_="slide_body") for slide in slides), (
        "expected every slide to wrap its content in a slide_body div"
    )


@then("only slides opening with a top-level heading are title slides")
def then_title_slides(scenario_state: dict[str, object]) -> None:
    slides = _soup(scenario_state).select("div.slide")
    flags = ["slide_type_title" in slide["class"] for slide in slides]
    assert flags == [True, False, True], "expected slides 1 and 3 to be title slides"
    titles = _soup(scenario_state).select("div.slide_title")
    assert len(titles) == 2, "expected two slide_title bodies"


@then("no table of contents is inserted")
def then_no_toc(scenario_state: dict[str, object]) -> None:
    soup = _soup(scenario_state)
    assert soup.find("div", class_="markor-table-of-contents") is None, (
        "presentation mode must suppress the table of contents"
    )


@then("the body holds no slide wrappers")
def then_no_slides(scenario_state: dict[str, object]) -> None:
    soup = _soup(scenario_state)
    assert soup.select("div.slide") == [], "expected the body to stay unwrapped"
    assert soup.find("h1").get_text() == "Only slide"
