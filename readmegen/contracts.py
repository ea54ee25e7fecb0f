"""Operation contracts: the schema pair, template, and failure message per operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type, cast

from .postproc.headings import ensure_heading
from .schemas import (
    CodeExplanation,
    CustomSection,
    CustomSectionInput,
    ExpansionInput,
    ExplainInput,
    ProjectNameSuggestion,
    PromptInput,
    ReadmeSections,
    Schema,
    SectionsInput,
    StructuredDocument,
    SuggestNameInput,
    Summary,
    SummarizeInput,
)

SUMMARIZE_INPUT = "summarize-input"
SUGGEST_NAME = "suggest-name"
GENERATE_SECTIONS = "generate-sections"
GENERATE_FROM_PROMPT = "generate-from-prompt"
GENERATE_CUSTOM_SECTION = "generate-custom-section"
GENERATE_DETAILED_EXPANSION = "generate-detailed-expansion"
EXPLAIN_SNIPPET = "explain-snippet"


@dataclass(frozen=True)
class OperationContract:
    """Declares everything an operation needs besides the model runtime."""

    name: str
    input_model: Type[Schema]
    output_model: Type[Schema]
    template: str
    failure_message: str
    postprocess: Optional[Callable[[Schema], Schema]] = None


def _normalise_section_title(section: Schema) -> Schema:
    title = cast(CustomSection, section).section_title
    return CustomSection.model_validate(
        dict(section.to_wire(), sectionTitle=ensure_heading(title, 2))
    )


CONTRACTS: Dict[str, OperationContract] = {
    contract.name: contract
    for contract in (
        OperationContract(
            name=SUMMARIZE_INPUT,
            input_model=SummarizeInput,
            output_model=Summary,
            template="summarize_input.j2",
            failure_message="AI failed to summarize the repository or code content.",
        ),
        OperationContract(
            name=SUGGEST_NAME,
            input_model=SuggestNameInput,
            output_model=ProjectNameSuggestion,
            template="suggest_name.j2",
            failure_message="AI failed to suggest a project name.",
        ),
        OperationContract(
            name=GENERATE_SECTIONS,
            input_model=SectionsInput,
            output_model=ReadmeSections,
            template="generate_sections.j2",
            failure_message="AI failed to generate README sections.",
        ),
        OperationContract(
            name=GENERATE_FROM_PROMPT,
            input_model=PromptInput,
            output_model=StructuredDocument,
            template="generate_from_prompt.j2",
            failure_message="AI failed to generate README content from the prompt.",
        ),
        OperationContract(
            name=GENERATE_CUSTOM_SECTION,
            input_model=CustomSectionInput,
            output_model=CustomSection,
            template="generate_custom_section.j2",
            failure_message="AI failed to generate custom section content.",
            postprocess=_normalise_section_title,
        ),
        OperationContract(
            name=GENERATE_DETAILED_EXPANSION,
            input_model=ExpansionInput,
            output_model=StructuredDocument,
            template="generate_detailed_expansion.j2",
            failure_message="AI failed to generate detailed README content.",
        ),
        OperationContract(
            name=EXPLAIN_SNIPPET,
            input_model=ExplainInput,
            output_model=CodeExplanation,
            template="explain_snippet.j2",
            failure_message="AI failed to generate an explanation for the code.",
        ),
    )
}


__all__ = [
    "CONTRACTS",
    "EXPLAIN_SNIPPET",
    "GENERATE_CUSTOM_SECTION",
    "GENERATE_DETAILED_EXPANSION",
    "GENERATE_FROM_PROMPT",
    "GENERATE_SECTIONS",
    "OperationContract",
    "SUGGEST_NAME",
    "SUMMARIZE_INPUT",
]
