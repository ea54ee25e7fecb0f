"""Core review data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol

from ..schemas import Schema


@dataclass
class ReviewIssue:
    """A single observation about a generated document field."""

    field: str
    kind: str
    detail: str


class Reviewer(Protocol):
    """Compares an operation's input with its accepted output."""

    name: str

    def review(self, before: Schema, after: Schema) -> List[ReviewIssue]:
        """Return issues found; an empty list means nothing to report."""


__all__ = ["ReviewIssue", "Reviewer"]
