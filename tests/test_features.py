"""Tests for feature detection and head/onload asset injection."""

from __future__ import annotations

import pytest

from notes_preview import _constants as const
from notes_preview.config import RenderSettings
from notes_preview.converter.features import (
    apply_feature_assets,
    detect_features,
    escape_math_delimiters,
)
from notes_preview.converter.models import FeatureFlags, RenderContext

BASE = "assets/"


def _context(markup: str) -> RenderContext:
    return RenderContext(markup=markup, features=detect_features(markup))


@pytest.mark.parametrize(
    ("markup", "expected"),
    [
        ("plain text", FeatureFlags()),
        ("costs $5", FeatureFlags(math=True)),
        ("```py\nx\n```", FeatureFlags(code=True)),
        ("```mermaid\ngraph TD\n```", FeatureFlags(code=True, mermaid=True)),
        ("!!! note\n    body", FeatureFlags(admonition=True)),
        ("??? tip\n    body", FeatureFlags(admonition=True)),
        ("---\nclass:beamer\n---\n", FeatureFlags(presentation=True)),
        ("---\nclass: beamer\n---\n", FeatureFlags(presentation=True)),
    ],
)
def test_detect_features(markup: str, expected: FeatureFlags) -> None:
    assert detect_features(markup) == expected


@pytest.mark.parametrize(
    "markup",
    ["class:  beamer", "xclass: beamer", "class: Beamer", "class: beamer2", "!! x"],
)
def test_near_miss_triggers_do_not_fire(markup: str) -> None:
    flags = detect_features(markup)
    assert not flags.presentation
    assert not flags.admonition


def test_math_enabled_injects_katex() -> None:
    context = _context("$x$")
    apply_feature_assets(context, RenderSettings(asset_base_url=BASE))
    head = "".join(context.head)
    assert "assets/katex/katex.min.css" in head
    assert "assets/katex/katex.min.js" in head
    assert context.markup == "$x$"


def test_math_disabled_escapes_dollars_outside_front_matter() -> None:
    markup = "---\nprice: $5\n---\nPay $5 or $6"
    context = _context(markup)
    apply_feature_assets(context, RenderSettings(math_enabled=False))
    assert context.head == []
    assert context.markup == "---\nprice: $5\n---\nPay \\$5 or \\$6"


def test_escape_math_delimiters_without_front_matter() -> None:
    assert escape_math_delimiters("a $b$") == "a \\$b\\$"


def test_code_blocks_inject_prism_and_onload() -> None:
    context = _context("```\ncode\n```")
    apply_feature_assets(context, RenderSettings(asset_base_url=BASE, word_wrap=True))
    head = "".join(context.head)
    assert "assets/prism/themes/prism.min.css" in head
    assert "line-numbers" not in head
    assert context.onload == [const.ONLOAD_PRISM, const.ONLOAD_WRAP_CODE]


def test_dark_mode_and_line_numbers_pick_prism_variants() -> None:
    context = _context("```\ncode\n```")
    apply_feature_assets(
        context, RenderSettings(asset_base_url=BASE, dark_mode=True, line_numbers=True)
    )
    head = "".join(context.head)
    assert "assets/prism/themes/prism-tomorrow.min.css" in head
    assert "prism-line-numbers.min.js" in head
    assert context.onload == [const.ONLOAD_PRISM]


@pytest.mark.parametrize(("dark", "theme"), [(False, "default"), (True, "dark")])
def test_mermaid_theme_follows_dark_mode(dark: bool, theme: str) -> None:
    context = _context("```mermaid\ngraph TD\n```")
    apply_feature_assets(context, RenderSettings(dark_mode=dark))
    head = "".join(context.head)
    assert "mermaid/mermaid.min.js" in head
    assert f"theme:'{theme}'" in head


def test_admonition_assets() -> None:
    context = _context("!!! warning\n    careful")
    apply_feature_assets(context, RenderSettings(asset_base_url=BASE))
    assert context.head == [
        "<link rel='stylesheet' href='assets/flexmark/admonition.css'/>"
        "<script src='assets/flexmark/admonition.js'></script>"
    ]
