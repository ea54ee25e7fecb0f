"""Reviews applied to accepted operation outputs."""

from .base import ReviewIssue, Reviewer
from .expansion import RENAMED, SHRUNK, ExpansionReviewer

__all__ = ["ExpansionReviewer", "RENAMED", "ReviewIssue", "Reviewer", "SHRUNK"]
