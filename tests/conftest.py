from __future__ import annotations

from typing import Any, Callable

import pytest

from readmegen.orchestrator import Orchestrator
from tests._fixtures.llm import ScriptedRunner, default_responses


@pytest.fixture
def scripted_runner() -> ScriptedRunner:
    """Provide a runner that answers every operation with a valid response."""
    return ScriptedRunner(default_responses())


@pytest.fixture
def make_orchestrator() -> Callable[..., Orchestrator]:
    def factory(runner: ScriptedRunner, **kwargs: Any) -> Orchestrator:
        return Orchestrator(llm_runner=runner, **kwargs)

    return factory
