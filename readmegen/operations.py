"""Generation operations: one validated model call per operation contract."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Protocol

import pydantic

from .contracts import CONTRACTS, OperationContract
from .errors import FieldIssue, ModelInvocationFailure, SchemaViolation, ValidationError
from .logging import get_operation_logger
from .prompting.builder import PromptBuilder
from .schemas import Schema

_FENCED_JSON = re.compile(r"^```(?:json)?\s*\n(?P<body>.*)\n```$", re.DOTALL)
_EMPTY_RESPONSES = {"", "null", "{}"}


class ModelRunner(Protocol):
    """The model runtime as seen by an operation."""

    def run(
        self,
        prompt: str,
        *,
        system: str | None = None,
        response_schema: Dict[str, Any] | None = None,
        schema_name: str | None = None,
    ) -> str:
        """Return the model's raw text response, or an empty string for no result."""


class GenerationOperation:
    """Wraps one prompt template and validates both sides of the model call.

    ``invoke`` either returns an instance of the contract's output model or
    raises: ``ValidationError`` before any model call when the input is
    malformed, ``ModelInvocationFailure`` when the runtime fails or returns
    nothing, and ``SchemaViolation`` when the response does not match the
    output schema. A malformed response is never partially accepted.
    """

    def __init__(
        self,
        contract: OperationContract,
        runner: ModelRunner,
        prompt_builder: PromptBuilder,
    ) -> None:
        self.contract = contract
        self.runner = runner
        self.prompt_builder = prompt_builder
        self.logger = get_operation_logger(contract.name)

    @property
    def name(self) -> str:
        return self.contract.name

    def invoke(self, payload: Mapping[str, Any] | Schema) -> Schema:
        data = self.validate_input(payload)
        request = self.prompt_builder.build_request(self.contract, data)
        self.logger.debug(
            "Invoking model with %s (%d prompt chars)",
            request.schema_name,
            request.metadata.get("prompt_chars", 0),
        )
        try:
            raw = self.runner.run(
                request.prompt,
                system=request.system,
                response_schema=request.response_schema,
                schema_name=request.schema_name,
            )
        except RuntimeError as exc:
            self.logger.warning("Model invocation failed: %s", exc)
            raise ModelInvocationFailure(self.name, self.contract.failure_message) from exc

        result = self._parse_output(raw)
        if self.contract.postprocess is not None:
            try:
                result = self.contract.postprocess(result)
            except pydantic.ValidationError as exc:
                self.logger.warning("Normalised response is no longer valid: %s", exc)
                raise SchemaViolation(self.name, self.contract.failure_message) from exc
        self.logger.debug("Model response accepted")
        return result

    def validate_input(self, payload: Mapping[str, Any] | Schema) -> Schema:
        model = self.contract.input_model
        if isinstance(payload, model):
            return payload
        if isinstance(payload, Schema):
            payload = payload.to_wire()
        try:
            return model.model_validate(payload)
        except pydantic.ValidationError as exc:
            error = input_error(self.name, exc)
            self.logger.info("Rejected input before invoking the model: %s", error)
            raise error from exc

    def _parse_output(self, raw: Optional[str]) -> Schema:
        text = _unwrap_fence((raw or "").strip())
        if text in _EMPTY_RESPONSES:
            self.logger.warning("Model returned no structured result")
            raise ModelInvocationFailure(self.name, self.contract.failure_message)
        try:
            return self.contract.output_model.model_validate_json(text)
        except pydantic.ValidationError as exc:
            self.logger.warning(
                "Response violates %s schema (%d error(s)): %s",
                self.contract.output_model.__name__,
                exc.error_count(),
                "; ".join(error["msg"] for error in exc.errors()[:3]),
            )
            raise SchemaViolation(self.name, self.contract.failure_message) from exc


def build_operations(
    runner: ModelRunner,
    prompt_builder: PromptBuilder | None = None,
    contracts: Mapping[str, OperationContract] | None = None,
) -> Dict[str, GenerationOperation]:
    """Verify every contract against its template and wrap it in an operation."""
    builder = prompt_builder or PromptBuilder()
    selected = contracts if contracts is not None else CONTRACTS
    builder.verify_all(selected.values())
    return {
        name: GenerationOperation(contract, runner, builder)
        for name, contract in selected.items()
    }


def input_error(operation: str, exc: pydantic.ValidationError) -> ValidationError:
    """Translate a pydantic error into a ``ValidationError`` listing each bad field."""
    issues = [
        FieldIssue(
            field=".".join(str(part) for part in error["loc"]) or "input",
            detail=error["msg"],
        )
        for error in exc.errors()
    ]
    summary = "; ".join(f"{issue.field}: {issue.detail}" for issue in issues)
    return ValidationError(f"Invalid input for {operation}: {summary}", issues)


def _unwrap_fence(text: str) -> str:
    match = _FENCED_JSON.match(text)
    return match.group("body").strip() if match else text


__all__ = ["GenerationOperation", "ModelRunner", "build_operations", "input_error"]
