"""Pipeline orchestration for repository, prompt, and expansion workflows."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union, cast
from urllib.parse import urlparse

import pydantic

from .config import LLMConfig, ReadmeGenConfig
from .contracts import (
    EXPLAIN_SNIPPET,
    GENERATE_CUSTOM_SECTION,
    GENERATE_DETAILED_EXPANSION,
    GENERATE_FROM_PROMPT,
    GENERATE_SECTIONS,
    SUGGEST_NAME,
    SUMMARIZE_INPUT,
)
from .errors import GenerationFailure, ValidationError
from .llm.runner import LLMRunner
from .logging import get_logger
from .models import Failure, GenerationRequest
from .operations import GenerationOperation, ModelRunner, build_operations, input_error
from .prompting.builder import PromptBuilder
from .prompting.constants import (
    CODE_MODE_REPO_URL,
    FOLDER_STRUCTURE_NOT_APPLICABLE,
    PLACEHOLDER_LANGUAGES,
)
from .schemas import (
    CodeExplanation,
    CustomSection,
    ExpansionInput,
    ProjectNameSuggestion,
    ReadmeSections,
    Schema,
    StructuredDocument,
    Summary,
)
from .sources import ContentSource, PlaceholderContentSource, truncate
from .validators import SHRUNK, ExpansionReviewer, Reviewer

SUMMARIZE_FAILED = "Failed to summarize repository."
SUGGEST_NAME_FAILED = "Failed to suggest a project name."
SECTIONS_FAILED = "Failed to generate README sections."
PROMPT_FAILED = "AI failed to generate README content from the prompt."
EXPANSION_FAILED = "AI failed to generate detailed README content."
INVALID_REPO_URL = "Invalid GitHub repository URL."
EMPTY_CODE = "Please provide some code to analyze."
MISSING_SOURCE = "Provide either a GitHub repository URL or code content."
AMBIGUOUS_SOURCE = "Provide either a GitHub repository URL or code content, not both."

_GITHUB_HOSTS = {"github.com", "www.github.com"}

DocumentResult = Union[StructuredDocument, Failure]


class Orchestrator:
    """Coordinates the generation workflows over a set of verified operations.

    Every public method returns either a fully populated result or a
    ``Failure``; nothing is retried and no field is ever defaulted on the
    model's behalf. The instance holds no per-request state, so one
    orchestrator can serve concurrent requests.
    """

    def __init__(
        self,
        llm_runner: ModelRunner | None = None,
        prompt_builder: PromptBuilder | None = None,
        content_source: ContentSource | None = None,
        config: ReadmeGenConfig | None = None,
        reviewer: Reviewer | None = None,
        operations: Mapping[str, GenerationOperation] | None = None,
    ) -> None:
        self.config = config or ReadmeGenConfig(root=Path.cwd())
        self.logger = get_logger("orchestrator")
        self.prompt_builder = prompt_builder or PromptBuilder(self.config.templates_dir)
        self.content_source = content_source or PlaceholderContentSource(
            max_chars=self.config.repository.max_file_chars
        )
        self.reviewer = reviewer or ExpansionReviewer()
        if operations is None:
            runner = llm_runner or self._resolve_llm_runner(self.config)
            operations = build_operations(runner, self.prompt_builder)
        self.operations: Dict[str, GenerationOperation] = dict(operations)

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------

    def generate_from_repository(
        self, repo_url: str | None = None, code_content: str | None = None
    ) -> DocumentResult:
        """Run summarize -> suggest-name -> generate-sections for a URL or code."""
        rejected = self._check_source(repo_url, code_content)
        if rejected is not None:
            return rejected

        code_mode = code_content is not None
        self.logger.info(
            "Starting repository run (%s)",
            "code content" if code_mode else repo_url,
        )

        summary = self._step(
            SUMMARIZE_INPUT,
            {"repoUrl": repo_url, "codeContent": code_content},
            SUMMARIZE_FAILED,
        )
        if isinstance(summary, Failure):
            return summary
        description = cast(Summary, summary).summary

        suggestion = self._step(
            SUGGEST_NAME,
            {"description": description, "languages": ", ".join(PLACEHOLDER_LANGUAGES)},
            SUGGEST_NAME_FAILED,
        )
        if isinstance(suggestion, Failure):
            return suggestion
        project_name = cast(ProjectNameSuggestion, suggestion).project_name

        if code_mode:
            source_url = CODE_MODE_REPO_URL
            file_contents = truncate(code_content or "", self.config.repository.max_file_chars)
        else:
            source_url = repo_url or ""
            file_contents = self.content_source.file_contents(
                source_url, project_name=project_name, description=description
            )
        sections = self._step(
            GENERATE_SECTIONS,
            {
                "repoUrl": source_url,
                "fileContents": file_contents,
                "projectName": project_name,
                "projectDescription": description,
            },
            SECTIONS_FAILED,
        )
        if isinstance(sections, Failure):
            return sections
        generated = cast(ReadmeSections, sections)

        self.logger.info("Repository run produced '%s'", project_name)
        return StructuredDocument(
            project_name=project_name,
            project_description=description,
            features=generated.features,
            technologies_used=generated.technologies_used,
            setup_instructions=generated.setup_instructions,
            folder_structure=FOLDER_STRUCTURE_NOT_APPLICABLE,
        )

    def generate_from_prompt(self, user_prompt: str) -> DocumentResult:
        """Ask the model for a complete document from a free-text idea."""
        self.logger.info("Starting prompt run (%d chars)", len(user_prompt or ""))
        result = self._step(
            GENERATE_FROM_PROMPT, {"userPrompt": user_prompt}, PROMPT_FAILED
        )
        if isinstance(result, Failure):
            return result
        return cast(StructuredDocument, result)

    def expand_document(
        self, current: StructuredDocument | Mapping[str, Any]
    ) -> DocumentResult:
        """Replace every field of ``current`` with a more detailed version, or fail."""
        if not isinstance(current, (StructuredDocument, Mapping)):
            return Failure(
                "Expansion needs an existing README document.",
                operation=GENERATE_DETAILED_EXPANSION,
                kind="validation",
            )
        try:
            before = ExpansionInput.from_document(current)
        except pydantic.ValidationError as exc:
            error = input_error(GENERATE_DETAILED_EXPANSION, exc)
            return self._rejected(GENERATE_DETAILED_EXPANSION, error)

        self.logger.info("Starting expansion run for '%s'", before.project_name)
        result = self._step(GENERATE_DETAILED_EXPANSION, before, EXPANSION_FAILED)
        if isinstance(result, Failure):
            return result
        expanded = cast(StructuredDocument, result)

        notes = self.reviewer.review(before, expanded)
        for note in notes:
            self.logger.warning("Expansion review: %s %s", note.field, note.detail)
        if self.config.expansion.enforce_growth and any(note.kind == SHRUNK for note in notes):
            self.logger.warning(
                "Rejecting expansion that shortened %d field(s)",
                sum(1 for note in notes if note.kind == SHRUNK),
            )
            return Failure(EXPANSION_FAILED, operation=GENERATE_DETAILED_EXPANSION, kind="schema")
        return expanded

    def explain_code(self, code: str, level: str) -> Union[CodeExplanation, Failure]:
        result = self._step(EXPLAIN_SNIPPET, {"code": code, "level": level})
        if isinstance(result, Failure):
            return result
        return cast(CodeExplanation, result)

    def generate_custom_section(self, user_prompt: str) -> Union[CustomSection, Failure]:
        result = self._step(GENERATE_CUSTOM_SECTION, {"userPrompt": user_prompt})
        if isinstance(result, Failure):
            return result
        return cast(CustomSection, result)

    def run(self, request: GenerationRequest) -> DocumentResult:
        """Dispatch ``request`` to the workflow its mode selects."""
        if request.mode == "url":
            return self.generate_from_repository(repo_url=request.repo_url)
        if request.mode == "code":
            return self.generate_from_repository(code_content=request.code_content)
        if request.mode == "prompt":
            return self.generate_from_prompt(request.user_prompt or "")
        return self.expand_document(request.existing)

    def run_batch(
        self, requests: Iterable[GenerationRequest], max_workers: int | None = None
    ) -> List[DocumentResult]:
        """Run independent requests concurrently; results keep request order."""
        pending = list(requests)
        if not pending:
            return []
        self.logger.info("Running batch of %d request(s)", len(pending))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self.run, pending))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _step(
        self,
        operation: str,
        payload: Mapping[str, Any] | Schema,
        failure_message: str | None = None,
    ) -> Union[Schema, Failure]:
        try:
            return self.operations[operation].invoke(payload)
        except ValidationError as exc:
            if failure_message is None:
                return self._rejected(operation, exc)
            self.logger.warning("Step %s rejected its input: %s", operation, exc)
            return Failure(failure_message, operation=operation, kind="validation")
        except GenerationFailure as exc:
            message = failure_message or exc.message
            self.logger.warning("Step %s failed: %s", operation, message)
            return Failure(message, operation=operation, kind=exc.kind)

    def _rejected(self, operation: str, error: ValidationError) -> Failure:
        self.logger.info("Rejected %s request: %s", operation, error)
        return Failure(str(error), operation=operation, kind="validation")

    def _check_source(
        self, repo_url: str | None, code_content: str | None
    ) -> Optional[Failure]:
        if repo_url is not None and code_content is not None:
            return Failure(AMBIGUOUS_SOURCE, operation=SUMMARIZE_INPUT, kind="validation")
        if code_content is not None:
            if not code_content.strip():
                return Failure(EMPTY_CODE, operation=SUMMARIZE_INPUT, kind="validation")
            return None
        if repo_url is None:
            return Failure(MISSING_SOURCE, operation=SUMMARIZE_INPUT, kind="validation")
        if not is_github_url(repo_url):
            self.logger.info("Rejected repository URL %r", repo_url)
            return Failure(INVALID_REPO_URL, operation=SUMMARIZE_INPUT, kind="validation")
        return None

    def _resolve_llm_runner(self, config: ReadmeGenConfig) -> LLMRunner:
        llm_cfg = config.llm or LLMConfig()
        kwargs: Dict[str, Any] = {}
        if llm_cfg.base_url:
            kwargs["base_url"] = llm_cfg.base_url
        if llm_cfg.api_key:
            kwargs["api_key"] = llm_cfg.api_key
        if llm_cfg.temperature is not None:
            kwargs["temperature"] = llm_cfg.temperature
        if llm_cfg.max_tokens is not None:
            kwargs["max_tokens"] = llm_cfg.max_tokens
        if llm_cfg.request_timeout is not None:
            kwargs["request_timeout"] = llm_cfg.request_timeout
        runner = LLMRunner(llm_cfg.model, **kwargs)
        self.logger.debug("Using model %s at %s", runner.model, runner.base_url)
        return runner


def is_github_url(value: str) -> bool:
    """Return True for an http(s) URL on github.com."""
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and (parsed.hostname or "") in _GITHUB_HOSTS


__all__ = ["DocumentResult", "Orchestrator", "is_github_url"]
