"""Render Markdown notes into preview HTML.

The converter turns a note into three strings: the body fragment, the head
includes and the onload script. This package exposes the conversion entry
point and the CLI used to run it from a shell.

Exports
-------
- ``app``: Cyclopts application behind the ``preview`` command.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``convert_markup``: Convert a note with the shared engine configuration.
- ``RenderResult``: The ``body``/``head``/``onload`` result value.

Examples
--------
>>> from notes_preview import convert_markup
>>> convert_markup("Hello *world*").body
'<p line="1">Hello <em>world</em></p>'
"""

from __future__ import annotations

from loguru import logger

from .cli import app, main
from .converter import RenderResult, convert_markup

logger.disable("notes_preview")

__all__ = ["RenderResult", "app", "convert_markup", "main"]
