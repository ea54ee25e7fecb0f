"""Tests for readmegen.operations."""

from __future__ import annotations

from dataclasses import replace

import pytest

from readmegen.contracts import (
    CONTRACTS,
    EXPLAIN_SNIPPET,
    GENERATE_CUSTOM_SECTION,
    SUMMARIZE_INPUT,
)
from readmegen.errors import ModelInvocationFailure, SchemaViolation, ValidationError
from readmegen.operations import GenerationOperation, build_operations
from readmegen.prompting.builder import PromptBuilder
from readmegen.schemas import CodeExplanation, CustomSection, ExplainInput, Summary

from tests._fixtures.llm import ScriptedRunner, default_responses


def _operation(name: str, runner: ScriptedRunner) -> GenerationOperation:
    return GenerationOperation(CONTRACTS[name], runner, PromptBuilder())


def test_build_operations_covers_every_contract() -> None:
    operations = build_operations(ScriptedRunner())

    assert set(operations) == set(CONTRACTS)
    assert operations[EXPLAIN_SNIPPET].name == EXPLAIN_SNIPPET


def test_invoke_returns_validated_output() -> None:
    runner = ScriptedRunner(default_responses())

    result = _operation(EXPLAIN_SNIPPET, runner).invoke({"code": "x = 1", "level": "beginner"})

    assert isinstance(result, CodeExplanation)
    assert result.explanation == "Adds two numbers."
    call = runner.calls[0]
    assert call["schema_name"] == "CodeExplanation"
    assert call["response_schema"]["required"] == ["explanation"]
    assert call["system"]


def test_invoke_accepts_input_model_instances() -> None:
    runner = ScriptedRunner(default_responses())

    result = _operation(EXPLAIN_SNIPPET, runner).invoke(ExplainInput(code="x", level="technical"))

    assert isinstance(result, CodeExplanation)


def test_invalid_level_fails_before_model_call() -> None:
    runner = ScriptedRunner(default_responses())

    with pytest.raises(ValidationError) as excinfo:
        _operation(EXPLAIN_SNIPPET, runner).invoke({"code": "x = 1", "level": "expert"})

    assert runner.calls == []
    assert [issue.field for issue in excinfo.value.issues] == ["level"]


def test_model_validator_errors_are_reported_against_input() -> None:
    runner = ScriptedRunner(default_responses())

    with pytest.raises(ValidationError) as excinfo:
        _operation(SUMMARIZE_INPUT, runner).invoke({})

    assert excinfo.value.issues[0].field == "input"
    assert runner.calls == []


def test_transport_error_becomes_invocation_failure() -> None:
    runner = ScriptedRunner({"CodeExplanation": RuntimeError("timed out")})

    with pytest.raises(ModelInvocationFailure) as excinfo:
        _operation(EXPLAIN_SNIPPET, runner).invoke({"code": "x", "level": "beginner"})

    assert excinfo.value.operation == EXPLAIN_SNIPPET
    assert excinfo.value.message == "AI failed to generate an explanation for the code."
    assert excinfo.value.kind == "model"


@pytest.mark.parametrize("raw", ["", "   ", "null", "{}"])
def test_empty_response_becomes_invocation_failure(raw) -> None:
    runner = ScriptedRunner({"Summary": raw})

    with pytest.raises(ModelInvocationFailure):
        _operation(SUMMARIZE_INPUT, runner).invoke({"repoUrl": "https://github.com/a/b"})


@pytest.mark.parametrize(
    "raw",
    [
        "The project is great.",
        '{"summary": ""}',
        '{"summary": 42}',
        '["summary"]',
    ],
)
def test_malformed_response_becomes_schema_violation(raw) -> None:
    runner = ScriptedRunner({"Summary": raw})

    with pytest.raises(SchemaViolation) as excinfo:
        _operation(SUMMARIZE_INPUT, runner).invoke({"repoUrl": "https://github.com/a/b"})

    assert excinfo.value.kind == "schema"
    assert excinfo.value.message == "AI failed to summarize the repository or code content."


def test_fenced_json_response_is_accepted() -> None:
    runner = ScriptedRunner({"Summary": '```json\n{"summary": "A tool."}\n```'})

    result = _operation(SUMMARIZE_INPUT, runner).invoke({"codeContent": "print(1)"})

    assert isinstance(result, Summary)
    assert result.summary == "A tool."


def test_custom_section_title_is_normalised() -> None:
    runner = ScriptedRunner(
        {"CustomSection": {"sectionTitle": "# Contributing", "sectionDescription": "PRs welcome."}}
    )

    result = _operation(GENERATE_CUSTOM_SECTION, runner).invoke({"userPrompt": "contributing"})

    assert isinstance(result, CustomSection)
    assert result.section_title == "## Contributing"
    assert result.section_description == "PRs welcome."


@pytest.mark.parametrize("title", ["##", "## ", "###"])
def test_custom_section_title_without_text_is_schema_violation(title) -> None:
    runner = ScriptedRunner(
        {"CustomSection": {"sectionTitle": title, "sectionDescription": "PRs welcome."}}
    )

    with pytest.raises(SchemaViolation) as excinfo:
        _operation(GENERATE_CUSTOM_SECTION, runner).invoke({"userPrompt": "contributing"})

    assert excinfo.value.message == "AI failed to generate custom section content."


def test_invalid_postprocessed_output_is_schema_violation() -> None:
    def blank_title(section):
        return CustomSection.model_validate(dict(section.to_wire(), sectionTitle="## "))

    contract = replace(CONTRACTS[GENERATE_CUSTOM_SECTION], postprocess=blank_title)
    runner = ScriptedRunner(default_responses())

    with pytest.raises(SchemaViolation):
        GenerationOperation(contract, runner, PromptBuilder()).invoke({"userPrompt": "contributing"})
