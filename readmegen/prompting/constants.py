"""Shared constants for prompting, placeholders, and README export."""

from __future__ import annotations

SYSTEM_PROMPT = (
    "You are a senior developer documentation writer. Stay grounded in the information you are given. "
    "Never invent commands, tools, or technologies the input does not support. "
    "Respond with a single JSON object that matches the requested schema and nothing else."
)

# Written into folderStructure by workflows that cannot derive one.
FOLDER_STRUCTURE_NOT_APPLICABLE = "Not applicable."

# Language detection is not implemented; suggest-name receives this instead.
PLACEHOLDER_LANGUAGES: tuple[str, ...] = ("Not specified",)

TECHNOLOGIES_UNSPECIFIED = "Technologies are not specified in the prompt."
TECHNOLOGIES_NOT_EVIDENT = "Technologies are not evident from the provided code."
FOLDER_STRUCTURE_UNDETERMINED = "Folder structure cannot be determined from the prompt alone."

# Answer for a custom-section prompt too vague to write about.
VAGUE_SECTION_TITLE = "## Additional Information"
VAGUE_SECTION_DESCRIPTION = "The request was too vague to expand into a README section."

CODE_MODE_REPO_URL = "N/A (code provided directly)"

# Export order for README sections; projectName becomes the document title.
SECTION_ORDER: tuple[str, ...] = (
    "projectDescription",
    "features",
    "technologiesUsed",
    "folderStructure",
    "setupInstructions",
)

SECTION_TITLES: dict[str, str] = {
    "projectDescription": "Project Description",
    "features": "Features",
    "technologiesUsed": "Technologies Used",
    "folderStructure": "Folder Structure",
    "setupInstructions": "Setup Instructions",
}


__all__ = [
    "CODE_MODE_REPO_URL",
    "FOLDER_STRUCTURE_NOT_APPLICABLE",
    "FOLDER_STRUCTURE_UNDETERMINED",
    "PLACEHOLDER_LANGUAGES",
    "SECTION_ORDER",
    "SECTION_TITLES",
    "SYSTEM_PROMPT",
    "TECHNOLOGIES_NOT_EVIDENT",
    "TECHNOLOGIES_UNSPECIFIED",
    "VAGUE_SECTION_DESCRIPTION",
    "VAGUE_SECTION_TITLE",
]
