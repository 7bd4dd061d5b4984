"""Recognise note files the previewer treats as Markdown."""

from __future__ import annotations

import os

MARKDOWN_EXTENSIONS = (
    ".md.txt",
    ".md",
    ".markdown",
    ".mkd",
    ".mdown",
    ".mkdn",
    ".mdwn",
    ".mdx",
    ".text",
    ".rmd",
)


def is_markdown_file(name: str | os.PathLike[str]) -> bool:
    """Return True when ``name`` carries a Markdown file extension.

    The check is case-insensitive. Plain ``.txt`` files are not Markdown, but
    ``.md.txt`` files are.

    Examples
    --------
    >>> is_markdown_file("notes/Todo.MD")
    True
    >>> is_markdown_file("journal.md.txt")
    True
    >>> is_markdown_file("journal.txt")
    False
    """
    lowered = os.fspath(name).lower()
    return lowered.endswith(MARKDOWN_EXTENSIONS)


__all__ = ["MARKDOWN_EXTENSIONS", "is_markdown_file"]
