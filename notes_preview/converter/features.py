"""Detect optional markup features and collect the assets they need.

Detection is a plain substring scan over the raw markup: the preview only pulls
in KaTeX, Prism, mermaid or admonition assets when the note could use them.
"""

from __future__ import annotations

import re
import typing as typ

from loguru import logger

from notes_preview import _constants as const

from .front_matter import split_front_matter
from .models import FeatureFlags

if typ.TYPE_CHECKING:
    from notes_preview.config import RenderSettings

    from .models import RenderContext

MATH_TRIGGER = "$"
CODE_TRIGGER = "```"
MERMAID_TRIGGER = "```mermaid"
ADMONITION_TRIGGERS = ("!!!", "???")
PRESENTATION_PATTERN = re.compile(r"^class: ?beamer\r?$", re.MULTILINE)


def detect_features(markup: str) -> FeatureFlags:
    """Return the feature flags triggered by ``markup``.

    Examples
    --------
    >>> detect_features("Cost: $5").math
    True
    >>> detect_features("---\\nclass: beamer\\n---\\n").presentation
    True
    """
    return FeatureFlags(
        math=MATH_TRIGGER in markup,
        code=CODE_TRIGGER in markup,
        mermaid=MERMAID_TRIGGER in markup,
        admonition=any(trigger in markup for trigger in ADMONITION_TRIGGERS),
        presentation=PRESENTATION_PATTERN.search(markup) is not None,
    )


def stylesheet(base: str, path: str) -> str:
    """Return a ``<link>`` include for ``path`` under ``base``."""
    return const.CSS_LINK_TEMPLATE.format(base=base, path=path)


def script(base: str, path: str) -> str:
    """Return a ``<script src>`` include for ``path`` under ``base``."""
    return const.JS_SCRIPT_TEMPLATE.format(base=base, path=path)


def _includes(
    base: str, stylesheets: typ.Iterable[str], scripts: typ.Iterable[str]
) -> str:
    links = [stylesheet(base, path) for path in stylesheets]
    links.extend(script(base, path) for path in scripts)
    return "".join(links)


def prism_includes(base: str, *, dark_mode: bool, line_numbers: bool) -> str:
    """Return the Prism theme, core and plugin includes for code blocks."""
    theme = const.PRISM_DARK_THEME_SUFFIX if dark_mode else ""
    stylesheets = [const.PRISM_THEME_TEMPLATE.format(theme=theme)]
    stylesheets.extend(const.PRISM_STYLESHEETS)
    scripts = list(const.PRISM_SCRIPTS)
    if line_numbers:
        stylesheets.extend(const.PRISM_LINE_NUMBER_STYLESHEETS)
        scripts.extend(const.PRISM_LINE_NUMBER_SCRIPTS)
    return _includes(base, stylesheets, scripts)


def escape_math_delimiters(markup: str) -> str:
    """Escape every ``$`` in the body so the engine renders it literally.

    A leading front-matter block is left alone: it is YAML, never parsed as
    Markdown, and its values must reach the token substitution unchanged.
    """
    block, body = split_front_matter(markup)
    return block + body.replace(MATH_TRIGGER, "\\" + MATH_TRIGGER)


def apply_feature_assets(context: RenderContext, settings: RenderSettings) -> None:
    """Append the includes and onload calls for ``context.features``.

    Parameters
    ----------
    context : RenderContext
        Per-call state; ``head`` and ``onload`` are appended to and
        ``markup`` is rewritten when math is present but disabled.
    settings : RenderSettings
        Feature toggles deciding which assets are injected.
    """
    base = settings.asset_base_url
    features = context.features
    if features.math:
        if settings.math_enabled:
            context.head.append(
                _includes(base, const.KATEX_STYLESHEETS, const.KATEX_SCRIPTS)
            )
        else:
            context.markup = escape_math_delimiters(context.markup)

    if features.code:
        context.head.append(
            prism_includes(
                base, dark_mode=settings.dark_mode, line_numbers=settings.line_numbers
            )
        )
        context.onload.append(const.ONLOAD_PRISM)
        if settings.word_wrap:
            context.onload.append(const.ONLOAD_WRAP_CODE)

    if features.mermaid:
        theme = "dark" if settings.dark_mode else "default"
        context.head.append(
            _includes(base, (), const.MERMAID_SCRIPTS)
            + const.MERMAID_INIT_TEMPLATE.format(theme=theme)
        )

    if features.admonition:
        context.head.append(
            _includes(base, const.ADMONITION_STYLESHEETS, const.ADMONITION_SCRIPTS)
        )
    logger.debug("detected features {}", features)


__all__ = [
    "apply_feature_assets",
    "detect_features",
    "escape_math_delimiters",
    "prism_includes",
    "script",
    "stylesheet",
]
