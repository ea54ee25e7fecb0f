"""Post-checks for detail-expansion results."""

from __future__ import annotations

from typing import List

from ..schemas import ExpansionInput, StructuredDocument
from .base import ReviewIssue

RENAMED = "renamed"
SHRUNK = "shrunk"

# (input attribute, output attribute, wire name of the output field)
_FIELD_PAIRS = (
    ("project_description", "project_description", "projectDescription"),
    ("current_features", "features", "features"),
    ("current_technologies_used", "technologies_used", "technologiesUsed"),
    ("current_setup_instructions", "setup_instructions", "setupInstructions"),
    ("current_folder_structure", "folder_structure", "folderStructure"),
)


class ExpansionReviewer:
    """Flags renamed projects and sections that came back shorter.

    The expansion prompt asks the model to keep the name and to grow every
    section; this reviewer reports where it did not. Whether a report blocks
    the result is the caller's policy.
    """

    name = "expansion"

    def review(self, before: ExpansionInput, after: StructuredDocument) -> List[ReviewIssue]:
        issues: List[ReviewIssue] = []
        if before.project_name.strip() != after.project_name.strip():
            issues.append(
                ReviewIssue(
                    field="projectName",
                    kind=RENAMED,
                    detail=f"renamed from {before.project_name!r} to {after.project_name!r}",
                )
            )
        for source_attr, target_attr, wire_name in _FIELD_PAIRS:
            old = getattr(before, source_attr).strip()
            new = getattr(after, target_attr).strip()
            if len(new) < len(old):
                issues.append(
                    ReviewIssue(
                        field=wire_name,
                        kind=SHRUNK,
                        detail=f"shorter than before ({len(old)} -> {len(new)} chars)",
                    )
                )
        return issues


__all__ = ["ExpansionReviewer", "RENAMED", "SHRUNK"]
