"""Markdown heading normalisation."""

from __future__ import annotations

import re

_LEADING_HASHES = re.compile(r"^#+\s*")


def ensure_heading(title: str, level: int = 2) -> str:
    """Return ``title`` as a single Markdown heading of ``level``.

    A title that already carries the canonical marker is returned trimmed.
    Otherwise any run of leading ``#`` characters is stripped and the
    canonical marker prepended, so ``"Contributing"``, ``"# Contributing"``
    and ``"###Contributing"`` all become ``"## Contributing"`` for level 2.
    """
    marker = "#" * level + " "
    cleaned = title.strip()
    if cleaned.startswith(marker) and not cleaned.startswith(marker + "#"):
        return cleaned
    return marker + _LEADING_HASHES.sub("", cleaned)


def strip_heading(title: str) -> str:
    """Return the heading text without its Markdown marker."""
    return _LEADING_HASHES.sub("", title.strip())


__all__ = ["ensure_heading", "strip_heading"]
