"""Tests for the prompt builder and the operation contracts it checks."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from readmegen.contracts import (
    CONTRACTS,
    EXPLAIN_SNIPPET,
    GENERATE_CUSTOM_SECTION,
    GENERATE_FROM_PROMPT,
    GENERATE_SECTIONS,
    SUMMARIZE_INPUT,
)
from readmegen.errors import ContractError
from readmegen.prompting.builder import PromptBuilder, ReadmeSection
from readmegen.prompting.constants import (
    SYSTEM_PROMPT,
    TECHNOLOGIES_NOT_EVIDENT,
    TECHNOLOGIES_UNSPECIFIED,
    VAGUE_SECTION_DESCRIPTION,
    VAGUE_SECTION_TITLE,
)
from readmegen.schemas import (
    CustomSectionInput,
    ExplainInput,
    PromptInput,
    SectionsInput,
    SummarizeInput,
)


def test_bundled_templates_match_their_contracts() -> None:
    PromptBuilder().verify_all(CONTRACTS.values())


def test_every_operation_has_a_contract() -> None:
    assert set(CONTRACTS) == {
        "summarize-input",
        "suggest-name",
        "generate-sections",
        "generate-from-prompt",
        "generate-custom-section",
        "generate-detailed-expansion",
        "explain-snippet",
    }


def test_render_binds_fields_verbatim() -> None:
    builder = PromptBuilder()
    payload = SectionsInput(
        repo_url="https://github.com/octo/site",
        file_contents="<div class=\"a & b\">",
        project_name="Site",
        project_description="A personal site.",
    )

    text = builder.render(CONTRACTS[GENERATE_SECTIONS], payload)

    assert "https://github.com/octo/site" in text
    assert "<div class=\"a & b\">" in text
    assert "A personal site." in text


def test_summarize_template_branches_on_source() -> None:
    builder = PromptBuilder()
    contract = CONTRACTS[SUMMARIZE_INPUT]

    url_text = builder.render(contract, SummarizeInput(repo_url="https://github.com/a/b"))
    code_text = builder.render(contract, SummarizeInput(code_content="print(1)"))

    assert "GitHub Repository URL: https://github.com/a/b" in url_text
    assert "print(1)" not in url_text
    assert "print(1)" in code_text
    assert "GitHub Repository URL" not in code_text


def test_prompt_template_carries_technology_fallback() -> None:
    text = PromptBuilder().render(
        CONTRACTS[GENERATE_FROM_PROMPT], PromptInput(user_prompt="A CLI tool")
    )

    assert TECHNOLOGIES_UNSPECIFIED in text


def test_sections_template_carries_technology_fallback() -> None:
    payload = SectionsInput(
        repo_url="N/A (code provided directly)",
        file_contents="x = 1",
        project_name="Snippet",
        project_description="A tiny script.",
    )

    text = PromptBuilder().render(CONTRACTS[GENERATE_SECTIONS], payload)

    assert f"answer exactly: \"{TECHNOLOGIES_NOT_EVIDENT}\"" in " ".join(text.split())


def test_custom_section_template_covers_vague_prompts() -> None:
    text = PromptBuilder().render(
        CONTRACTS[GENERATE_CUSTOM_SECTION], CustomSectionInput(user_prompt="stuff")
    )

    assert f"\"{VAGUE_SECTION_TITLE}\"" in text
    assert f"\"{VAGUE_SECTION_DESCRIPTION}\"" in text


def test_explain_template_varies_by_level() -> None:
    builder = PromptBuilder()
    contract = CONTRACTS[EXPLAIN_SNIPPET]

    beginner = builder.render(contract, ExplainInput(code="x = 1", level="beginner"))
    technical = builder.render(contract, ExplainInput(code="x = 1", level="technical"))

    assert "simple language" in beginner
    assert "simple language" not in technical
    assert "trade-offs" in technical


def test_build_request_carries_schema_and_system_prompt() -> None:
    request = PromptBuilder().build_request(
        CONTRACTS[GENERATE_FROM_PROMPT], PromptInput(user_prompt="A todo app")
    )

    assert request.operation == GENERATE_FROM_PROMPT
    assert request.system == SYSTEM_PROMPT
    assert "A todo app" in request.prompt
    assert request.schema_name == "StructuredDocument"
    assert "folderStructure" in request.response_schema["properties"]
    assert request.metadata["template"] == "generate_from_prompt.j2"


def test_verify_rejects_template_missing_an_input_field(tmp_path: Path) -> None:
    (tmp_path / "generate_from_prompt.j2").write_text(
        "Write a README.\nReturn projectName, projectDescription, features, "
        "technologiesUsed, setupInstructions and folderStructure.\n",
        encoding="utf-8",
    )
    builder = PromptBuilder(templates_dir=tmp_path)

    with pytest.raises(ContractError, match="userPrompt"):
        builder.verify(CONTRACTS[GENERATE_FROM_PROMPT])


def test_verify_rejects_unknown_placeholder(tmp_path: Path) -> None:
    (tmp_path / "custom.j2").write_text(
        "{{ userPrompt }} {{ audience }} projectName projectDescription features "
        "technologiesUsed setupInstructions folderStructure",
        encoding="utf-8",
    )
    contract = replace(CONTRACTS[GENERATE_FROM_PROMPT], template="custom.j2")

    with pytest.raises(ContractError, match="audience"):
        PromptBuilder(templates_dir=tmp_path).verify(contract)


def test_verify_rejects_output_field_without_instruction(tmp_path: Path) -> None:
    (tmp_path / "custom.j2").write_text(
        "{{ userPrompt }}\nReturn projectName and features.", encoding="utf-8"
    )
    contract = replace(CONTRACTS[GENERATE_FROM_PROMPT], template="custom.j2")

    with pytest.raises(ContractError, match="setupInstructions"):
        PromptBuilder(templates_dir=tmp_path).verify(contract)


def test_verify_reports_missing_template() -> None:
    contract = replace(CONTRACTS[GENERATE_FROM_PROMPT], template="missing.j2")

    with pytest.raises(ContractError, match="not found"):
        PromptBuilder().verify(contract)


def test_render_readme_orders_sections() -> None:
    text = PromptBuilder().render_readme(
        "Demo",
        [ReadmeSection(title="Features", body="- a"), ReadmeSection(title="Setup", body="run")],
    )

    assert text == "# Demo\n\n## Features\n- a\n\n## Setup\nrun\n"
