"""README export from a structured document."""

from __future__ import annotations

import re

from ..prompting.builder import PromptBuilder, ReadmeSection
from ..prompting.constants import SECTION_ORDER, SECTION_TITLES
from ..schemas import CustomSection, StructuredDocument
from .headings import ensure_heading

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9_]", re.IGNORECASE)


def render_readme(document: StructuredDocument, builder: PromptBuilder | None = None) -> str:
    """Render ``document`` as README Markdown in the canonical section order."""
    builder = builder or PromptBuilder()
    fields = document.to_wire()
    sections = [
        ReadmeSection(title=SECTION_TITLES[name], body=_section_body(name, fields[name]))
        for name in SECTION_ORDER
    ]
    return builder.render_readme(document.project_name.strip(), sections)


def append_section(markdown: str, section: CustomSection) -> str:
    """Append a custom section to exported README Markdown."""
    title = ensure_heading(section.section_title, 2)
    return f"{markdown.rstrip()}\n\n{title}\n{section.section_description.strip()}\n"


def readme_filename(project_name: str) -> str:
    """Return a download-safe ``.md`` filename for ``project_name``."""
    stem = _UNSAFE_FILENAME_CHARS.sub("_", project_name.strip()).lower()
    return f"{stem or 'readme'}.md"


def _section_body(name: str, value: str) -> str:
    body = value.strip()
    if name == "folderStructure" and "```" not in body and _looks_like_tree(body):
        return f"```\n{body}\n```"
    return body


def _looks_like_tree(body: str) -> bool:
    return "\n" in body and ("/" in body or "├" in body or "└" in body)


__all__ = ["append_section", "readme_filename", "render_readme"]
