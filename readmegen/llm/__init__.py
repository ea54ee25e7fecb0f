"""Model runtime adapters."""

from .runner import LLMRequest, LLMRunner, post_chat_completion

__all__ = ["LLMRequest", "LLMRunner", "post_chat_completion"]
