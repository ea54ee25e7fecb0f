"""Repository content sources feeding the section-generation step."""

from __future__ import annotations

from typing import Protocol

_TRUNCATION_MARKER = "\n... (truncated)"
_DESCRIPTION_PREVIEW_CHARS = 150

_FRONTEND_HINTS = ("personal website", "frontend application", "static site")
_BACKEND_HINTS = ("e-commerce", "mern stack", "backend api")

_GENERIC_BODY = """\
// Representative file contents for: {repo_url}
// Project: {project_name}
// Description: {description}...

class MainApplication {{
  constructor() {{
    console.log("Initializing {project_name}");
  }}
  run() {{
    console.log("{project_name} is running.");
  }}
}}
new MainApplication().run();
"""

_FRONTEND_BODY = """\
// Representative file contents for a frontend/portfolio project: {repo_url}
// Project: {project_name}
// Description: {description}...

// A presentational component listing showcased work
// const ProjectCard = ({{ title, description, tech }}) => (
//   <article className="project-card">
//     <h2>{{title}}</h2>
//     <p>{{description}}</p>
//     <div>Technologies: {{tech.join(', ')}}</div>
//   </article>
// );
"""

_BACKEND_BODY = """\
// Representative file contents for an e-commerce/backend project: {repo_url}
// Project: {project_name}
// Description: {description}...

// A JSON API exposing a product catalogue
// app.get('/api/products', (req, res) => res.json(products));
// app.post('/api/products', (req, res) => {{
//   products.push(req.body);
//   res.status(201).json(req.body);
// }});
"""


class ContentSource(Protocol):
    """Supplies the sample code that generate-sections reasons over."""

    def file_contents(self, repo_url: str, *, project_name: str, description: str) -> str:
        """Return bounded, concatenated sample source text for ``repo_url``."""


class PlaceholderContentSource:
    """Stands in for real repository retrieval with a representative sample.

    The sample is picked deterministically from the project name and
    description: a frontend/portfolio body, a backend/e-commerce body, or a
    generic one. It never touches the network.
    """

    def __init__(self, max_chars: int = 12000) -> None:
        self.max_chars = max_chars

    def file_contents(self, repo_url: str, *, project_name: str, description: str) -> str:
        template = self._select_template(project_name, description)
        body = template.format(
            repo_url=repo_url,
            project_name=project_name,
            description=description[:_DESCRIPTION_PREVIEW_CHARS],
        )
        return truncate(body, self.max_chars)

    @staticmethod
    def _select_template(project_name: str, description: str) -> str:
        name = project_name.lower()
        summary = description.lower()
        if "portfolio" in name or any(hint in summary for hint in _FRONTEND_HINTS):
            return _FRONTEND_BODY
        if "e-comm" in name or "store" in name or any(hint in summary for hint in _BACKEND_HINTS):
            return _BACKEND_BODY
        return _GENERIC_BODY


def truncate(text: str, limit: int) -> str:
    """Bound ``text`` to ``limit`` characters, marking the cut when one happens."""
    if limit <= 0 or len(text) <= limit:
        return text
    return text[: max(limit - len(_TRUNCATION_MARKER), 0)] + _TRUNCATION_MARKER


__all__ = ["ContentSource", "PlaceholderContentSource", "truncate"]
