"""README generation through orchestrated language-model calls."""

from .models import Failure, GenerationRequest
from .orchestrator import Orchestrator
from .schemas import CodeExplanation, CustomSection, StructuredDocument

__all__ = [
    "CodeExplanation",
    "CustomSection",
    "Failure",
    "GenerationRequest",
    "Orchestrator",
    "StructuredDocument",
]

__version__ = "0.1.0"
