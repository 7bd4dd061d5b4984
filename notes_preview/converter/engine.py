"""Configure python-markdown for note previews and run it.

The extension set and base extension configs are built once at import time as
an immutable :class:`EngineConfig`. Each conversion layers a small
:class:`RenderOverlay` (TOC bounds, title and classes, the line resolver) on
top and gets its own ``markdown.Markdown`` instance, so nothing mutable is
shared between calls.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from types import MappingProxyType

from markdown import Markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor
from pymdownx.emoji import to_alt
from pymdownx.superfences import fence_div_format

from notes_preview._constants import (
    DEFAULT_TOC_TITLE,
    EXPLICIT_TOC_MARKER,
    FRONT_MATTER_SCOPES,
    HEADER_ANCHOR_CLASS,
    TOC_DIV_CLASS,
    TOC_LIST_CLASS,
)

from .front_matter import split_front_matter
from .line_numbers import LineNumberTreeprocessor

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from .line_numbers import LineResolver

TOC_DIRECTIVE_PATTERN = re.compile(r"^\[TOC\]:\s*#.*$")
ESCAPABLE_DOLLAR = "$"


class FrontMatterPreprocessor(Preprocessor):
    """Drop a leading front-matter block before block parsing."""

    def run(self, lines: list[str]) -> list[str]:
        """Return ``lines`` without the front-matter block, if there is one."""
        block, body = split_front_matter("\n".join(lines))
        if not block:
            return lines
        return body.split("\n")


class TocDirectivePreprocessor(Preprocessor):
    """Rewrite ``[TOC]: # ...`` reference-style directives to a plain marker.

    Left alone, the engine would read these lines as link reference
    definitions and drop them.
    """

    def run(self, lines: list[str]) -> list[str]:
        """Return ``lines`` with each directive replaced by a ``[TOC]`` paragraph."""
        result: list[str] = []
        for line in lines:
            if TOC_DIRECTIVE_PATTERN.match(line):
                result.extend(["", EXPLICIT_TOC_MARKER, ""])
            else:
                result.append(line)
        return result


class NoteSyntaxExtension(Extension):
    """Note-specific syntax shared by every conversion.

    Registers the front-matter and TOC-directive preprocessors and makes
    ``\\$`` a valid escape so disabled math renders a literal dollar sign.
    """

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the note preprocessors on the Markdown instance."""
        md.preprocessors.register(FrontMatterPreprocessor(md), "note_front_matter", 27)
        md.preprocessors.register(TocDirectivePreprocessor(md), "note_toc_directive", 26)
        if ESCAPABLE_DOLLAR not in md.ESCAPED_CHARS:
            md.ESCAPED_CHARS.append(ESCAPABLE_DOLLAR)


class TocListClassTreeprocessor(Treeprocessor):
    """Add the configured class to the lists inside the generated TOC."""

    def __init__(self, md: Markdown, div_class: str, list_class: str) -> None:
        super().__init__(md)
        self.div_classes = frozenset(div_class.split())
        self.list_class = list_class

    def run(self, root: Element) -> None:
        """Tag every ``ul`` below a TOC container with the list class."""
        for div in root.iter("div"):
            classes = frozenset((div.get("class") or "").split())
            if not self.div_classes <= classes:
                continue
            for listing in div.iter("ul"):
                listing.set("class", self.list_class)


class OverlayExtension(Extension):
    """Per-call processors configured from a :class:`RenderOverlay`."""

    def __init__(self, overlay: RenderOverlay) -> None:
        super().__init__()
        self.overlay = overlay

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the TOC list classer and, when set, the line annotator."""
        md.treeprocessors.register(
            TocListClassTreeprocessor(
                md, self.overlay.toc_div_class, self.overlay.toc_list_class
            ),
            "note_toc_list_class",
            4,
        )
        if self.overlay.line_resolver is not None:
            md.treeprocessors.register(
                LineNumberTreeprocessor(md, self.overlay.line_resolver),
                "note_line_numbers",
                6,
            )


@dc.dataclass(frozen=True, slots=True)
class EngineConfig:
    """Process-wide extension list and base extension configs.

    Attributes
    ----------
    extensions : tuple
        Extension names or stateless instances passed to every conversion.
    extension_configs : Mapping[str, Mapping[str, object]]
        Read-only base configuration keyed by extension name.
    output_format : str
        python-markdown serialiser; ``"xhtml"`` emits ``<hr />``.
    """

    extensions: tuple[str | Extension, ...]
    extension_configs: cabc.Mapping[str, cabc.Mapping[str, object]]
    output_format: str = "xhtml"


@dc.dataclass(frozen=True, slots=True)
class RenderOverlay:
    """Request-specific engine options layered over :class:`EngineConfig`."""

    toc_levels: tuple[int, int] = (1, 3)
    toc_title: str = DEFAULT_TOC_TITLE
    toc_div_class: str = TOC_DIV_CLASS
    toc_list_class: str = TOC_LIST_CLASS
    token_scopes: tuple[str, ...] = FRONT_MATTER_SCOPES
    line_resolver: LineResolver | None = None

    def extension_configs(self) -> dict[str, dict[str, object]]:
        """Return the config entries this overlay contributes."""
        low, high = self.toc_levels
        return {
            "toc": {
                "toc_depth": f"{low}-{high}",
                "title": self.toc_title,
                "toc_class": self.toc_div_class,
            }
        }


def build_engine_config() -> EngineConfig:
    """Build the shared extension set used for note previews."""
    configs: dict[str, dict[str, object]] = {
        "toc": {
            "anchorlink": True,
            "anchorlink_class": HEADER_ANCHOR_CLASS,
        },
        "wikilinks": {"base_url": "", "end_url": ".md"},
        "pymdownx.highlight": {"use_pygments": False},
        "pymdownx.superfences": {
            "custom_fences": [
                {"name": "mermaid", "class": "mermaid", "format": fence_div_format}
            ]
        },
        "pymdownx.arithmatex": {"generic": True},
        "pymdownx.emoji": {"emoji_generator": to_alt},
        "pymdownx.tilde": {"subscript": True, "delete": True},
        "pymdownx.caret": {"superscript": True, "insert": True},
    }
    return EngineConfig(
        extensions=(
            "tables",
            "footnotes",
            "admonition",
            "toc",
            "smarty",
            "sane_lists",
            "wikilinks",
            "pymdownx.highlight",
            "pymdownx.superfences",
            "pymdownx.details",
            "pymdownx.arithmatex",
            "pymdownx.tilde",
            "pymdownx.caret",
            "pymdownx.tasklist",
            "pymdownx.emoji",
            "pymdownx.magiclink",
            NoteSyntaxExtension(),
        ),
        extension_configs=MappingProxyType(
            {name: MappingProxyType(config) for name, config in configs.items()}
        ),
    )


DEFAULT_ENGINE = build_engine_config()


def render_markdown(
    text: str,
    engine: EngineConfig = DEFAULT_ENGINE,
    overlay: RenderOverlay | None = None,
) -> str:
    """Parse and render ``text`` with the shared engine plus ``overlay``.

    Parameters
    ----------
    text : str
        Markup after every text transform of the pipeline.
    engine : EngineConfig, optional
        Shared configuration; defaults to :data:`DEFAULT_ENGINE`.
    overlay : RenderOverlay, optional
        Per-call options; defaults to an overlay with default TOC options and
        no line annotation.

    Returns
    -------
    str
        Rendered HTML. Engine errors are not caught.
    """
    overlay = overlay or RenderOverlay()
    configs = {name: dict(config) for name, config in engine.extension_configs.items()}
    for name, config in overlay.extension_configs().items():
        configs.setdefault(name, {}).update(config)
    md = Markdown(
        extensions=[*engine.extensions, OverlayExtension(overlay)],
        extension_configs=configs,
        output_format=engine.output_format,
    )
    return md.convert(text)


__all__ = [
    "DEFAULT_ENGINE",
    "EngineConfig",
    "FrontMatterPreprocessor",
    "NoteSyntaxExtension",
    "OverlayExtension",
    "RenderOverlay",
    "TocDirectivePreprocessor",
    "TocListClassTreeprocessor",
    "build_engine_config",
    "render_markdown",
]
