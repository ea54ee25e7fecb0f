"""FastAPI application entrypoint for readmegen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, TypeVar

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .. import __version__
from ..config import ReadmeGenConfig
from ..errors import ValidationError
from ..models import Failure, GenerationRequest
from ..orchestrator import Orchestrator
from ..schemas import CodeExplanation, CustomSection, StructuredDocument

T = TypeVar("T")


class _Body(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RepositoryRequest(_Body):
    repo_url: Optional[str] = None
    code_content: Optional[str] = None


class PromptRequest(_Body):
    user_prompt: str


class ExplainRequest(_Body):
    code: str
    level: str = "beginner"


class SectionRequest(_Body):
    user_prompt: str


class BatchRequest(_Body):
    requests: List[Dict[str, Any]]


class BatchResponse(_Body):
    results: List[Dict[str, Any]]


class HealthResponse(BaseModel):
    status: str
    version: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def _failure_response(failure: Failure) -> JSONResponse:
    status = 422 if failure.kind == "validation" else 502
    return JSONResponse(status_code=status, content=failure.to_wire())


async def _in_worker(call: Callable[[], T]) -> T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, call)


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing readmegen operations."""

    app = FastAPI(title="readmegen", version=__version__)

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    @app.post("/generate/repository", response_model=StructuredDocument)
    async def generate_repository(
        payload: RepositoryRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        result = await _in_worker(
            lambda: orchestrator.generate_from_repository(
                repo_url=payload.repo_url, code_content=payload.code_content
            )
        )
        if isinstance(result, Failure):
            return _failure_response(result)
        return result

    @app.post("/generate/prompt", response_model=StructuredDocument)
    async def generate_prompt(
        payload: PromptRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        result = await _in_worker(lambda: orchestrator.generate_from_prompt(payload.user_prompt))
        if isinstance(result, Failure):
            return _failure_response(result)
        return result

    @app.post("/expand", response_model=StructuredDocument)
    async def expand(
        payload: Dict[str, Any],
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        result = await _in_worker(lambda: orchestrator.expand_document(payload))
        if isinstance(result, Failure):
            return _failure_response(result)
        return result

    @app.post("/explain", response_model=CodeExplanation)
    async def explain(
        payload: ExplainRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        result = await _in_worker(lambda: orchestrator.explain_code(payload.code, payload.level))
        if isinstance(result, Failure):
            return _failure_response(result)
        return result

    @app.post("/section", response_model=CustomSection)
    async def section(
        payload: SectionRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        result = await _in_worker(
            lambda: orchestrator.generate_custom_section(payload.user_prompt)
        )
        if isinstance(result, Failure):
            return _failure_response(result)
        return result

    @app.post("/generate/batch", response_model=BatchResponse)
    async def generate_batch(
        payload: BatchRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        try:
            requests = [GenerationRequest.from_wire(item) for item in payload.requests]
        except ValidationError as exc:
            failure = Failure(str(exc), kind="validation")
            return JSONResponse(status_code=422, content=failure.to_wire())
        results = await _in_worker(lambda: orchestrator.run_batch(requests))
        return BatchResponse(results=[result.to_wire() for result in results])

    return app


def run_service(
    host: str = "127.0.0.1",
    port: int = 8000,
    config: ReadmeGenConfig | None = None,
) -> None:  # pragma: no cover - integration path
    orchestrator = Orchestrator(config=config)
    app = create_app(lambda: orchestrator)
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
