"""Request and result types exchanged with the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .errors import FieldIssue, ValidationError

MODE_FIELDS: Dict[str, str] = {
    "url": "repo_url",
    "code": "code_content",
    "prompt": "user_prompt",
    "expand": "existing",
}

_WIRE_NAMES: Dict[str, str] = {
    "repo_url": "repoUrl",
    "code_content": "codeContent",
    "user_prompt": "userPrompt",
    "existing": "existing",
}


@dataclass(frozen=True)
class GenerationRequest:
    """One generation request; ``mode`` selects which single input is active."""

    mode: str
    repo_url: Optional[str] = None
    code_content: Optional[str] = None
    user_prompt: Optional[str] = None
    existing: Optional[Any] = None

    def __post_init__(self) -> None:
        expected = MODE_FIELDS.get(self.mode)
        if expected is None:
            raise ValidationError(
                f"Unknown generation mode '{self.mode}'.",
                [FieldIssue(field="mode", detail=f"expected one of {', '.join(MODE_FIELDS)}")],
            )
        active = [name for name in _WIRE_NAMES if getattr(self, name) is not None]
        if active != [expected]:
            issues = [
                FieldIssue(field=_WIRE_NAMES[name], detail="not accepted in this mode")
                for name in active
                if name != expected
            ]
            if expected not in active:
                issues.append(FieldIssue(field=_WIRE_NAMES[expected], detail="field required"))
            raise ValidationError(
                f"A '{self.mode}' request takes exactly one input: {_WIRE_NAMES[expected]}.",
                issues,
            )

    @classmethod
    def for_url(cls, repo_url: str) -> "GenerationRequest":
        return cls(mode="url", repo_url=repo_url)

    @classmethod
    def for_code(cls, code_content: str) -> "GenerationRequest":
        return cls(mode="code", code_content=code_content)

    @classmethod
    def for_prompt(cls, user_prompt: str) -> "GenerationRequest":
        return cls(mode="prompt", user_prompt=user_prompt)

    @classmethod
    def for_expansion(cls, existing: Any) -> "GenerationRequest":
        return cls(mode="expand", existing=existing)

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "GenerationRequest":
        """Build a request from its camelCase JSON form, e.g. ``{"mode": "url", "repoUrl": ...}``."""
        kwargs = {
            name: data[wire]
            for name, wire in _WIRE_NAMES.items()
            if data.get(wire) is not None
        }
        return cls(mode=str(data.get("mode", "")), **kwargs)


@dataclass(frozen=True)
class Failure:
    """A terminal, user-presentable failure of one public operation."""

    message: str
    operation: Optional[str] = None
    kind: str = "model"

    def to_wire(self) -> Dict[str, Any]:
        return {"detail": self.message, "operation": self.operation, "kind": self.kind}


__all__ = ["Failure", "GenerationRequest", "MODE_FIELDS"]
