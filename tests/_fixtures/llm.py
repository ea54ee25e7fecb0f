"""Canned model responses and a scripted model runtime for tests."""

from __future__ import annotations

import json
from typing import Any, Dict, List

SUMMARY = {"summary": "A command line tool that converts CSV files into JSON documents."}
NAME = {"projectName": "csv2json"}
SECTIONS = {
    "features": "- Streams large CSV files\n- Emits pretty JSON",
    "technologiesUsed": "- Python\n- argparse",
    "setupInstructions": "1. Clone the repository\n2. Run `pip install -e .`",
}
DOCUMENT = {
    "projectName": "csv2json",
    "projectDescription": "Converts CSV files to JSON.",
    "features": "- Conversion\n- Streaming",
    "technologiesUsed": "Technologies are not specified in the prompt.",
    "setupInstructions": "1. Clone\n2. Install",
    "folderStructure": "Folder structure cannot be determined from the prompt alone.",
}


class ScriptedRunner:
    """Model runtime double that answers per response schema and records calls.

    A scripted answer may be a mapping (sent back as JSON), a raw string, an
    exception instance (raised), or a callable taking the prompt.
    """

    def __init__(self, responses: Dict[str, Any] | None = None) -> None:
        self.responses: Dict[str, Any] = dict(responses or {})
        self.calls: List[Dict[str, Any]] = []

    def run(
        self,
        prompt: str,
        *,
        system: str | None = None,
        response_schema: Dict[str, Any] | None = None,
        schema_name: str | None = None,
    ) -> str:
        self.calls.append(
            {
                "prompt": prompt,
                "system": system,
                "response_schema": response_schema,
                "schema_name": schema_name,
            }
        )
        answer = self.responses.get(schema_name or "")
        if isinstance(answer, Exception):
            raise answer
        if callable(answer):
            answer = answer(prompt)
        if answer is None:
            return ""
        if isinstance(answer, str):
            return answer
        return json.dumps(answer)

    @property
    def schema_names(self) -> List[str]:
        return [call["schema_name"] for call in self.calls]


def default_responses() -> Dict[str, Any]:
    return {
        "Summary": SUMMARY,
        "ProjectNameSuggestion": NAME,
        "ReadmeSections": SECTIONS,
        "StructuredDocument": DOCUMENT,
        "CustomSection": {"sectionTitle": "Contributing", "sectionDescription": "Open a PR."},
        "CodeExplanation": {"explanation": "Adds two numbers."},
    }
