"""Renders operation prompts from Jinja templates and checks them against their schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Sequence, cast

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound, meta

from ..errors import ContractError
from .constants import SYSTEM_PROMPT

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..contracts import OperationContract
    from ..schemas import Schema

@dataclass(frozen=True)
class PromptMessage:
    """Represents a single chat message for LLM prompting."""

    role: str
    content: str


@dataclass
class PromptRequest:
    """A fully rendered prompt plus the output shape the model must honour."""

    operation: str
    messages: List[PromptMessage]
    response_schema: Dict[str, Any]
    schema_name: str
    metadata: Dict[str, object] = field(default_factory=dict)

    @property
    def system(self) -> str | None:
        for message in self.messages:
            if message.role == "system":
                return message.content
        return None

    @property
    def prompt(self) -> str:
        return "\n\n".join(message.content for message in self.messages if message.role == "user")


@dataclass
class ReadmeSection:
    """A titled block of Markdown rendered into the exported README."""

    title: str
    body: str


class PromptBuilder:
    """Binds operation inputs into their templates.

    Templates are rendered with ``StrictUndefined`` and without autoescaping,
    so input text lands in the prompt verbatim and a missing value is an
    error rather than an empty string.
    """

    SYSTEM_PROMPT = SYSTEM_PROMPT

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def verify(self, contract: OperationContract) -> None:
        """Fail fast when a template and its contract disagree about fields."""
        source = self._template_source(contract)
        placeholders = meta.find_undeclared_variables(self._env.parse(source))
        expected = set(contract.input_model.wire_fields())

        problems: List[str] = []
        unbound = sorted(expected - placeholders)
        if unbound:
            problems.append(f"input fields never used by the template: {', '.join(unbound)}")
        unknown = sorted(placeholders - expected)
        if unknown:
            problems.append(f"placeholders without an input field: {', '.join(unknown)}")
        unmentioned = [name for name in contract.output_model.wire_fields() if name not in source]
        if unmentioned:
            problems.append(f"output fields without an instruction: {', '.join(unmentioned)}")
        if problems:
            raise ContractError(
                f"Contract '{contract.name}' does not match template {contract.template}: "
                + "; ".join(problems)
            )

    def verify_all(self, contracts: Iterable[OperationContract]) -> None:
        for contract in contracts:
            self.verify(contract)

    def render(self, contract: OperationContract, payload: Schema) -> str:
        """Render the instruction text for ``payload``; same input, same text."""
        try:
            template = self._env.get_template(contract.template)
        except TemplateNotFound as exc:
            raise ContractError(
                f"Template {contract.template} for '{contract.name}' not found"
            ) from exc
        return template.render(**payload.to_wire()).strip()

    def build_request(self, contract: OperationContract, payload: Schema) -> PromptRequest:
        user_prompt = self.render(contract, payload)
        messages = [
            PromptMessage(role="system", content=self.SYSTEM_PROMPT),
            PromptMessage(role="user", content=user_prompt),
        ]
        return PromptRequest(
            operation=contract.name,
            messages=messages,
            response_schema=contract.output_model.model_json_schema(by_alias=True),
            schema_name=contract.output_model.__name__,
            metadata={"template": contract.template, "prompt_chars": len(user_prompt)},
        )

    def render_readme(self, title: str, sections: Sequence[ReadmeSection]) -> str:
        template = self._env.get_template("readme.j2")
        return template.render(title=title, sections=sections).strip() + "\n"

    def _template_source(self, contract: OperationContract) -> str:
        loader = cast(FileSystemLoader, self._env.loader)
        try:
            source, _, _ = loader.get_source(self._env, contract.template)
        except TemplateNotFound as exc:
            raise ContractError(
                f"Template {contract.template} for '{contract.name}' not found"
            ) from exc
        return source

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        # Custom directories shadow the bundled templates file by file.
        directories.append(str(Path(__file__).with_name("templates")))
        return Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )


__all__ = ["PromptBuilder", "PromptMessage", "PromptRequest", "ReadmeSection"]
