"""Cyclopts CLI entrypoint for previewing notes outside the editor.

The ``preview`` console script converts a Markdown note the same way the
editor's preview pane does. ``preview render`` writes a standalone HTML page,
the bare body fragment, or the three result strings as JSON;
``preview features`` reports which optional features a note triggers.

Examples
--------
Render a note to a page next to it:

>>> from notes_preview.cli import app
>>> app.run(
...     ["render", "notes/todo.md", "--output", "todo.html"]
... )  # doctest: +SKIP

Inspect the result strings as JSON:

>>> app.run(["render", "notes/todo.md", "--format", "json"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter
from loguru import logger

from .config import RenderSettings, load_render_settings
from .converter import MarkupConverter, detect_features
from .file_types import is_markdown_file
from .logging_config import configure_logging
from .page import PreviewPageBuilder

OutputFormat = typ.Literal["html", "json", "fragment"]

app = App(name="preview", config=cyclopts.config.Env("PREVIEW_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _read_note(path: Path) -> str:
    """Return the note text, exiting with status 1 when the file is missing."""
    if not path.is_file():
        print(f"error: note '{_format_path(path)}' not found", file=sys.stderr)
        raise SystemExit(1)
    if not is_markdown_file(path):
        logger.warning("{} does not look like a Markdown file", path.name)
    return path.read_text(encoding="utf-8")


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="Convert a Markdown note into preview HTML.")
def render(
    path: Path,
    *,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to preview settings YAML", env_var="PREVIEW_CONFIG"),
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write to this file instead of stdout")
    ] = None,
    output_format: typ.Annotated[
        OutputFormat,
        Parameter(
            name="--format",
            help="html page, json result strings, or the body fragment",
            env_var="PREVIEW_FORMAT",
        ),
    ] = "html",
    verbose: typ.Annotated[
        bool, Parameter(help="Log pipeline decisions to stderr")
    ] = False,
) -> None:
    """Render the note at ``path``.

    Parameters
    ----------
    path : Path
        Markdown note to convert. Its parent folder name feeds the blog-post
        table-of-contents heuristic.
    config : Path or None, optional
        Settings YAML; defaults apply when omitted (``PREVIEW_CONFIG``).
    output : Path or None, optional
        Destination file. When omitted the result is written to stdout.
    output_format : {"html", "json", "fragment"}, optional
        ``html`` wraps the result in the preview page template, ``json``
        encodes the body, head and onload strings, ``fragment`` emits the
        body alone.
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    SystemExit
        With status 1 when the note does not exist.
    SettingsError
        If the settings file is invalid.
    """
    configure_logging(verbose=verbose)
    settings = load_render_settings(config) if config else RenderSettings()
    markup = _read_note(path)
    result = MarkupConverter().convert(markup, settings, document_path=path)

    match output_format:
        case "json":
            _emit(msgspec_json.encode(result).decode("utf-8") + "\n", output)
        case "fragment":
            _emit(result.body, output)
        case _:
            builder = PreviewPageBuilder()
            if output is None:
                sys.stdout.write(
                    builder.render(
                        result, title=path.stem, dark_mode=settings.dark_mode
                    )
                )
            else:
                builder.write(
                    result, output, title=path.stem, dark_mode=settings.dark_mode
                )
                print(f"wrote {_format_path(output)}")


@app.command(help="List the optional features a note triggers.")
def features(path: Path) -> None:
    """Print the feature flags detected in the note at ``path`` as JSON."""
    flags = detect_features(_read_note(path))
    print(msgspec_json.encode(flags).decode("utf-8"))


def main() -> None:
    """Invoke the Cyclopts application behind the ``preview`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
