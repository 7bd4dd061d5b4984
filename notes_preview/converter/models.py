"""Shared dataclasses used by the markup conversion pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class FeatureFlags:
    """Optional features detected in raw markup.

    Attributes
    ----------
    math : bool
        The markup contains a ``$`` and may carry TeX math.
    code : bool
        The markup contains a fenced code block.
    mermaid : bool
        The markup contains a ``mermaid`` fenced block.
    admonition : bool
        The markup contains ``!!!`` or ``???`` admonition blocks.
    presentation : bool
        A line reads ``class:beamer`` or ``class: beamer``.
    """

    math: bool = False
    code: bool = False
    mermaid: bool = False
    admonition: bool = False
    presentation: bool = False


@dc.dataclass(slots=True)
class RenderContext:
    """Per-call working state for a single conversion.

    Attributes
    ----------
    markup : str
        Working copy of the markup; pipeline steps replace it in turn.
    features : FeatureFlags
        Flags detected on the markup as supplied by the caller.
    head : list[str]
        Append-only buffer of stylesheet and script include tags.
    onload : list[str]
        Append-only buffer of initialisation script statements.
    line_shift : tuple[int, int] | None
        ``(first_line, count)`` describing lines the pipeline injected ahead
        of user content, or ``None`` when nothing was injected.
    """

    markup: str
    features: FeatureFlags = dc.field(default_factory=FeatureFlags)
    head: list[str] = dc.field(default_factory=list)
    onload: list[str] = dc.field(default_factory=list)
    line_shift: tuple[int, int] | None = None


@dc.dataclass(frozen=True, slots=True)
class SlideSegment:
    """One presentation slide cut from rendered HTML."""

    html: str
    is_title: bool = False


@dc.dataclass(frozen=True, slots=True)
class RenderResult:
    """The three strings a conversion hands back to the page template.

    Attributes
    ----------
    body : str
        Front-matter container (if any) followed by the rendered body or
        slides.
    head : str
        Ordered concatenation of stylesheet and script include tags.
    onload : str
        Ordered concatenation of initialisation script statements.
    """

    body: str
    head: str
    onload: str


__all__ = ["FeatureFlags", "RenderContext", "RenderResult", "SlideSegment"]
