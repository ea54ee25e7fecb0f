"""Exception taxonomy shared by operations and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


class ReadmeGenError(RuntimeError):
    """Base class for readmegen errors."""


class ConfigError(ReadmeGenError):
    """Raised when the configuration file cannot be parsed."""


class ContractError(ReadmeGenError):
    """Raised when a template and its schemas disagree about field names."""


@dataclass
class FieldIssue:
    """A single field that failed input validation."""

    field: str
    detail: str


class ValidationError(ReadmeGenError):
    """Raised when caller input fails an operation's input schema."""

    def __init__(self, message: str, issues: Sequence[FieldIssue] = ()) -> None:
        super().__init__(message)
        self.issues: List[FieldIssue] = list(issues)


class GenerationFailure(ReadmeGenError):
    """Raised when an operation cannot produce a trusted structured result."""

    kind = "model"

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.message = message


class ModelInvocationFailure(GenerationFailure):
    """The model runtime was unreachable or returned nothing."""

    kind = "model"


class SchemaViolation(GenerationFailure):
    """The model returned a response that does not match the output schema."""

    kind = "schema"


__all__ = [
    "ConfigError",
    "ContractError",
    "FieldIssue",
    "GenerationFailure",
    "ModelInvocationFailure",
    "ReadmeGenError",
    "SchemaViolation",
    "ValidationError",
]
