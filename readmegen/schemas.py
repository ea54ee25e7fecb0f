"""Input and output shapes for every generation operation.

These models are the single source of truth for field names: prompt
templates are checked against them, the JSON schema handed to the model
runtime is derived from them, and model responses are validated with them.
Python attributes are snake_case; the wire (and template) names are the
camelCase aliases.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Mapping, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .postproc.headings import strip_heading
from .prompting.constants import FOLDER_STRUCTURE_NOT_APPLICABLE

ExplanationLevel = Literal["beginner", "technical"]
EXPLANATION_LEVELS: tuple[str, ...] = ("beginner", "technical")


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


Text = Annotated[str, AfterValidator(_require_text)]


def _require_heading_text(value: str) -> str:
    if not strip_heading(value):
        raise ValueError("heading has no text")
    return value


HeadingText = Annotated[Text, AfterValidator(_require_heading_text)]


class Schema(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    @classmethod
    def wire_fields(cls) -> tuple[str, ...]:
        return tuple(field.alias or name for name, field in cls.model_fields.items())


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class SummarizeInput(Schema):
    repo_url: Optional[str] = Field(
        default=None, description="The URL of the GitHub repository."
    )
    code_content: Optional[str] = Field(
        default=None, description="The raw code content to be summarized."
    )

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "SummarizeInput":
        provided = [
            value for value in (self.repo_url, self.code_content) if value and value.strip()
        ]
        if len(provided) != 1:
            raise ValueError("exactly one of repoUrl or codeContent must be provided")
        return self


class SuggestNameInput(Schema):
    description: Text = Field(
        description="The high level description of the project, including its purpose and main functionalities."
    )
    languages: Text = Field(
        description="Comma separated programming languages detected in the project."
    )


class SectionsInput(Schema):
    repo_url: Text = Field(description="The URL of the GitHub repository.")
    file_contents: Text = Field(
        description="A small, representative sample of code snippets or file structure descriptions from the repository. This is not the entire codebase."
    )
    project_name: Text = Field(description="The name of the project.")
    project_description: Text = Field(description="The high-level description of the project.")


class PromptInput(Schema):
    user_prompt: Text = Field(
        description="A textual prompt describing the project, its purpose, functionalities, and any known technologies."
    )


class CustomSectionInput(Schema):
    user_prompt: Text = Field(description="A prompt or idea from the user for a new section.")


class ExpansionInput(Schema):
    project_name: Text = Field(
        description="The original project name. This should generally remain the same unless refinement is explicitly needed."
    )
    project_description: str = Field(
        description="The original project description to be expanded or refined."
    )
    current_features: str = Field(
        description="The current 'Features' section content to be expanded with more detail, sub-features, or examples."
    )
    current_technologies_used: str = Field(
        description="The current 'Technologies Used' section content to be expanded, explaining the role of each technology."
    )
    current_setup_instructions: str = Field(
        description="The current 'Setup Instructions' section content to be expanded with more context, troubleshooting, or alternative steps."
    )
    current_folder_structure: str = Field(
        description="The current 'Folder Structure' section content to be expanded, explaining key directory purposes."
    )

    @classmethod
    def from_document(cls, document: "StructuredDocument | Mapping[str, Any]") -> "ExpansionInput":
        """Map a (possibly partial) document onto the expansion input shape.

        ``folderStructure`` is the one field the repository workflow never
        produces, so its absence maps to the not-applicable placeholder.
        Every other missing field is left missing and fails validation.
        """
        if isinstance(document, StructuredDocument):
            data: Mapping[str, Any] = document.to_wire()
        else:
            data = document
        payload: Dict[str, Any] = {
            "projectName": _lookup(data, "projectName", "project_name"),
            "projectDescription": _lookup(data, "projectDescription", "project_description"),
            "currentFeatures": _lookup(data, "features"),
            "currentTechnologiesUsed": _lookup(data, "technologiesUsed", "technologies_used"),
            "currentSetupInstructions": _lookup(data, "setupInstructions", "setup_instructions"),
            "currentFolderStructure": _lookup(data, "folderStructure", "folder_structure")
            or FOLDER_STRUCTURE_NOT_APPLICABLE,
        }
        return cls.model_validate({key: value for key, value in payload.items() if value is not None})


class ExplainInput(Schema):
    code: Text = Field(description="The code snippet to be explained.")
    level: ExplanationLevel = Field(
        description="The desired explanation level: 'beginner' or 'technical'."
    )


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


class Summary(Schema):
    summary: Text = Field(
        description="A summary of the repository or code, including its purpose, functionality, and key features."
    )


class ProjectNameSuggestion(Schema):
    project_name: Text = Field(
        description="A creative and relevant project name suggestion based on the description."
    )


class ReadmeSections(Schema):
    features: Text = Field(
        description="A list of key features of the project, derived from its description and sample code."
    )
    technologies_used: Text = Field(
        description="Primary programming languages, frameworks, and key libraries, based strictly on evidence in the description and sample code."
    )
    setup_instructions: Text = Field(
        description="Detailed, step-by-step instructions on how to set up and run the project locally, assuming a novice developer."
    )


class StructuredDocument(Schema):
    """The six-field README record produced by every generation workflow."""

    project_name: Text = Field(description="A suitable project name.")
    project_description: Text = Field(description="A detailed project description.")
    features: Text = Field(description="Key features, as prose or a Markdown list.")
    technologies_used: Text = Field(
        description="Languages, frameworks, and libraries, as prose or a Markdown list."
    )
    setup_instructions: Text = Field(description="Step-by-step setup instructions in Markdown.")
    folder_structure: Text = Field(
        description="A representative folder structure, usually a fenced tree."
    )


class CustomSection(Schema):
    section_title: HeadingText = Field(
        description="A concise and relevant title for the new section, as a level 2 Markdown heading."
    )
    section_description: Text = Field(
        description="A descriptive paragraph or Markdown content for the new section."
    )


class CodeExplanation(Schema):
    explanation: Text = Field(description="The explanation of the code snippet.")


def _lookup(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


__all__ = [
    "CodeExplanation",
    "CustomSection",
    "CustomSectionInput",
    "EXPLANATION_LEVELS",
    "ExpansionInput",
    "ExplainInput",
    "ExplanationLevel",
    "ProjectNameSuggestion",
    "PromptInput",
    "ReadmeSections",
    "Schema",
    "SectionsInput",
    "StructuredDocument",
    "SuggestNameInput",
    "Summary",
    "SummarizeInput",
]
