"""Sequence the conversion steps from raw note markup to preview HTML.

The steps run in a fixed order: feature detection, TOC placement and site
shorthands, front-matter extraction, token substitution, newline mode, link
sanitising, the Markdown engine, then HTML post-processing. Every text step
works on plain markup, so tokens are resolved before the engine ever sees
them.

Example
-------
>>> from notes_preview.converter import convert_markup
>>> result = convert_markup("# Hello")
>>> "Hello</h1>" in result.body
True
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ
from pathlib import Path

from loguru import logger

from notes_preview._constants import (
    ATTACHMENT_LINK_PREFIX,
    ATTACHMENT_LINK_REPLACEMENT,
    AUTO_TOC_BLOCK,
    FRONT_MATTER_SCOPES,
    MARKDOWN_STYLESHEET,
    ONLOAD_LINE_NUMBERS,
    SITE_BASEURL_REPLACEMENT,
    SITE_BASEURL_TOKEN,
    SITE_DATE_TOKEN,
)
from notes_preview.config import RenderSettings

from .engine import DEFAULT_ENGINE, EngineConfig, RenderOverlay, render_markdown
from .features import apply_feature_assets, detect_features, stylesheet
from .front_matter import fill_container, process_front_matter, wrap_container
from .line_numbers import SourceLineIndex
from .links import escape_spaces_in_links
from .models import RenderContext, RenderResult
from .postprocess import fix_footnotes, present_slides
from .tokens import build_replacements, substitute_tokens
from .toc import insert_toc_marker, should_insert_toc, toc_insertion_offset

if typ.TYPE_CHECKING:
    import os

SITE_DATE_FORMAT = "%x"
HARD_BREAK = "  \n"


def parent_folder_name(document_path: str | os.PathLike[str] | None) -> str | None:
    """Return the name of the folder holding ``document_path``, if known."""
    if document_path is None:
        return None
    return Path(document_path).parent.name or None


def replace_site_tokens(markup: str, *, today: dt.date | None = None) -> str:
    """Resolve the Jekyll-style site shorthands and attachment links.

    Examples
    --------
    >>> replace_site_tokens("[a]({{ site.baseurl }}/b.md)")
    '[a](../b.md)'
    >>> replace_site_tokens("![x](@attachment/x.png)")
    '![x](../attachements/x.png)'
    """
    if SITE_BASEURL_TOKEN in markup:
        markup = markup.replace(SITE_BASEURL_TOKEN, SITE_BASEURL_REPLACEMENT)
    if SITE_DATE_TOKEN in markup:
        stamp = (today or dt.datetime.now().astimezone().date()).strftime(
            SITE_DATE_FORMAT
        )
        markup = markup.replace(SITE_DATE_TOKEN, stamp)
    return markup.replace(ATTACHMENT_LINK_PREFIX, ATTACHMENT_LINK_REPLACEMENT)


def apply_newline_mode(markup: str) -> str:
    """Turn every newline into a Markdown hard line break."""
    return markup.replace("\n", HARD_BREAK)


class MarkupConverter:
    """Convert note markup into the body, head and onload preview strings.

    Parameters
    ----------
    engine : EngineConfig, optional
        Shared engine configuration; defaults to the process-wide
        :data:`~notes_preview.converter.engine.DEFAULT_ENGINE`.
    scopes : tuple[str, ...], optional
        Scope keywords recognised in ``{{ scope.name }}`` tokens.
    annotate_lines : bool, optional
        Stamp block elements with their source ``line``; on by default.
    """

    def __init__(
        self,
        engine: EngineConfig = DEFAULT_ENGINE,
        *,
        scopes: tuple[str, ...] = FRONT_MATTER_SCOPES,
        annotate_lines: bool = True,
    ) -> None:
        self.engine = engine
        self.scopes = scopes
        self.annotate_lines = annotate_lines

    def convert(
        self,
        markup: str,
        settings: RenderSettings,
        document_path: str | os.PathLike[str] | None = None,
        *,
        today: dt.date | None = None,
    ) -> RenderResult:
        """Convert ``markup`` using ``settings``.

        Parameters
        ----------
        markup : str
            The note text as stored.
        settings : RenderSettings
            Resolved feature toggles.
        document_path : str or PathLike, optional
            Location of the note; only its parent folder name is used, to
            recognise blog posts.
        today : datetime.date, optional
            Date substituted for the site date token; defaults to the
            current local date.

        Returns
        -------
        RenderResult
            The front-matter block followed by the rendered body, plus the
            head includes and onload statements.
        """
        context = RenderContext(markup=markup, features=detect_features(markup))
        context.head.append(stylesheet(settings.asset_base_url, MARKDOWN_STYLESHEET))
        apply_feature_assets(context, settings)
        presentation = context.features.presentation
        overlay = RenderOverlay(
            toc_levels=settings.toc_levels,
            toc_title=settings.toc_title,
            token_scopes=self.scopes,
        )

        self._place_toc(context, settings, document_path)
        context.markup = replace_site_tokens(context.markup, today=today)

        front_matter = process_front_matter(
            context.markup,
            settings,
            presentation=presentation,
            scopes=overlay.token_scopes,
        )
        container = ""
        if front_matter.attributes:
            replacements = build_replacements(
                front_matter.attributes, overlay.token_scopes
            )
            context.markup = substitute_tokens(
                context.markup,
                front_matter.attributes,
                overlay.token_scopes,
                replacements=replacements,
            )
            container = fill_container(
                front_matter.shown, replacements, overlay.token_scopes[0]
            )
        container = wrap_container(container)

        if settings.newline_is_paragraph:
            context.markup = apply_newline_mode(context.markup)
        context.markup = escape_spaces_in_links(context.markup)

        if self.annotate_lines:
            overlay = dc.replace(
                overlay,
                line_resolver=SourceLineIndex(
                    context.markup, line_shift=context.line_shift
                ),
            )
        html = render_markdown(context.markup, self.engine, overlay)
        html = fix_footnotes(html)
        if presentation:
            html = present_slides(html)

        if settings.line_numbers:
            context.onload.append(ONLOAD_LINE_NUMBERS)
        return RenderResult(
            body=container + html,
            head="".join(context.head),
            onload="".join(context.onload),
        )

    @staticmethod
    def _place_toc(
        context: RenderContext,
        settings: RenderSettings,
        document_path: str | os.PathLike[str] | None,
    ) -> None:
        folder = parent_folder_name(document_path)
        if not should_insert_toc(
            context.markup,
            settings,
            parent_folder=folder,
            presentation=context.features.presentation,
        ):
            return
        offset = toc_insertion_offset(context.markup)
        context.line_shift = (
            context.markup[:offset].count("\n") + 1,
            AUTO_TOC_BLOCK.count("\n"),
        )
        context.markup = insert_toc_marker(context.markup)
        logger.debug("inserted table of contents marker at offset {}", offset)


def convert_markup(
    markup: str,
    settings: RenderSettings | None = None,
    document_path: str | os.PathLike[str] | None = None,
    *,
    today: dt.date | None = None,
) -> RenderResult:
    """Convert ``markup`` with the shared engine and default settings if none given."""
    return MarkupConverter().convert(
        markup, settings or RenderSettings(), document_path, today=today
    )


__all__ = [
    "MarkupConverter",
    "apply_newline_mode",
    "convert_markup",
    "parent_folder_name",
    "replace_site_tokens",
]
