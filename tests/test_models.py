"""Tests for readmegen.models."""

from __future__ import annotations

import pytest

from readmegen.errors import ValidationError
from readmegen.models import Failure, GenerationRequest


def test_constructors_set_mode() -> None:
    assert GenerationRequest.for_url("https://github.com/a/b").mode == "url"
    assert GenerationRequest.for_code("x = 1").code_content == "x = 1"
    assert GenerationRequest.for_prompt("idea").user_prompt == "idea"
    assert GenerationRequest.for_expansion({"projectName": "x"}).mode == "expand"


def test_request_rejects_unknown_mode() -> None:
    with pytest.raises(ValidationError) as excinfo:
        GenerationRequest(mode="pdf")

    assert excinfo.value.issues[0].field == "mode"


def test_request_rejects_inputs_of_another_mode() -> None:
    with pytest.raises(ValidationError) as excinfo:
        GenerationRequest(mode="url", repo_url="https://github.com/a/b", user_prompt="idea")

    assert [issue.field for issue in excinfo.value.issues] == ["userPrompt"]


def test_request_requires_its_input() -> None:
    with pytest.raises(ValidationError) as excinfo:
        GenerationRequest(mode="prompt")

    assert [issue.field for issue in excinfo.value.issues] == ["userPrompt"]


def test_from_wire_reads_camel_case() -> None:
    request = GenerationRequest.from_wire({"mode": "code", "codeContent": "print(1)"})

    assert request == GenerationRequest.for_code("print(1)")


def test_from_wire_without_mode_is_rejected() -> None:
    with pytest.raises(ValidationError):
        GenerationRequest.from_wire({"repoUrl": "https://github.com/a/b"})


def test_failure_to_wire() -> None:
    failure = Failure("Failed to summarize repository.", operation="summarize-input")

    assert failure.to_wire() == {
        "detail": "Failed to summarize repository.",
        "operation": "summarize-input",
        "kind": "model",
    }
