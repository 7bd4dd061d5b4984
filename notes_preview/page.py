"""Wrap a conversion result in a standalone preview page.

The converter only produces the body fragment and the head and onload
strings; the page template supplies the surrounding document, as an editor's
preview pane would. :class:`PreviewPageBuilder` loads
``templates/preview_page.jinja`` with Jinja2 (autoescape on, the HTML
fragments passed through the ``safe`` filter) and renders or writes the page.

>>> from notes_preview.converter import convert_markup
>>> builder = PreviewPageBuilder()
>>> html = builder.render(convert_markup("# Hi"), title="Hi")
>>> html.startswith("<!DOCTYPE html>")
True
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

if typ.TYPE_CHECKING:
    from .converter import RenderResult

PAGE_TEMPLATE = "preview_page.jinja"
DEFAULT_PAGE_TITLE = "Preview"


class PreviewPageBuilder:
    """Render conversion results into the preview page template."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``preview_page.jinja``. Defaults to the
            templates shipped with the package.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(PAGE_TEMPLATE)

    def render(
        self,
        result: RenderResult,
        *,
        title: str = DEFAULT_PAGE_TITLE,
        dark_mode: bool = False,
    ) -> str:
        """Return the full page HTML for ``result``, ending with a newline."""
        html = self.template.render(
            title=title,
            dark_mode=dark_mode,
            head=result.head,
            body=result.body,
            onload=result.onload,
        )
        if not html.endswith("\n"):
            html += "\n"
        return html

    def write(
        self,
        result: RenderResult,
        output_path: Path,
        *,
        title: str = DEFAULT_PAGE_TITLE,
        dark_mode: bool = False,
    ) -> Path:
        """Render the page and write it as UTF-8 to ``output_path``."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            self.render(result, title=title, dark_mode=dark_mode), encoding="utf-8"
        )
        return output_path


__all__ = ["PreviewPageBuilder"]
