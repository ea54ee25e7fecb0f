"""Structured-output client for OpenAI-compatible chat completion endpoints.

Gemini exposes such an endpoint, which is the default; any local or hosted
server speaking the same protocol works by setting ``base_url``.
"""

from __future__ import annotations

import http.client
import json
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

_UNSET: Any = object()


@dataclass
class LLMRequest:
    """Everything needed to perform one model call."""

    prompt: str
    system: Optional[str]
    model: str
    temperature: Optional[float]
    max_tokens: Optional[int]
    base_url: Optional[str]
    api_key: Optional[str]
    request_timeout: Optional[float]
    response_schema: Optional[Dict[str, Any]] = None
    schema_name: Optional[str] = None

    @property
    def endpoint(self) -> str:
        if not self.base_url:
            raise RuntimeError("HTTP runner requires a base_url to be configured.")
        return f"{self.base_url}/chat/completions"

    def to_payload(self) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = []
        if self.system:
            messages.append({"role": "system", "content": self.system})
        messages.append({"role": "user", "content": self.prompt})

        payload: Dict[str, Any] = {"model": self.model, "messages": messages}
        optional = {"temperature": self.temperature, "max_tokens": self.max_tokens}
        payload.update({key: value for key, value in optional.items() if value is not None})
        if self.response_schema is not None:
            payload["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": self.schema_name or "response",
                    "schema": self.response_schema,
                },
            }
        return payload


class LLMRunner:
    """Sends rendered prompts to the model runtime.

    ``run`` returns the raw text of the first choice, stripped, or an empty
    string when the model produced nothing. Transport and protocol failures
    raise ``RuntimeError``. Pass ``runner`` to replace the HTTP transport.
    """

    DEFAULT_MODEL = "gemini-2.0-flash"
    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai"
    ENV_MODEL_KEYS = ("READMEGEN_LLM_MODEL", "OPENAI_MODEL")
    ENV_BASE_URL_KEYS = ("READMEGEN_LLM_BASE_URL", "OPENAI_BASE_URL")
    ENV_API_KEY_KEYS = (
        "READMEGEN_LLM_API_KEY",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "OPENAI_API_KEY",
    )

    def __init__(
        self,
        model: str | None = None,
        *,
        base_url: Optional[str] = _UNSET,
        temperature: Optional[float] = 0.2,
        max_tokens: Optional[int] = None,
        api_key: Optional[str] = _UNSET,
        request_timeout: Optional[float] = 60.0,
        runner: Callable[[LLMRequest], str] | None = None,
    ) -> None:
        self.model = model or _from_env(self.ENV_MODEL_KEYS) or self.DEFAULT_MODEL
        if base_url is _UNSET:
            base_url = _from_env(self.ENV_BASE_URL_KEYS) or self.DEFAULT_BASE_URL
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_key = _from_env(self.ENV_API_KEY_KEYS) if api_key is _UNSET else api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.request_timeout = request_timeout
        self._transport = runner or post_chat_completion

    def run(
        self,
        prompt: str,
        *,
        system: str | None = None,
        response_schema: Dict[str, Any] | None = None,
        schema_name: str | None = None,
    ) -> str:
        """Send ``prompt`` and return the model's response text."""
        return self._transport(
            LLMRequest(
                prompt=prompt,
                system=system,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                base_url=self.base_url,
                api_key=self.api_key,
                request_timeout=self.request_timeout,
                response_schema=response_schema,
                schema_name=schema_name,
            )
        )


def post_chat_completion(request: LLMRequest) -> str:
    """POST ``request`` to its endpoint and return the first choice's text."""
    headers = {"Content-Type": "application/json"}
    if request.api_key:
        headers["Authorization"] = f"Bearer {request.api_key}"
    http_request = Request(
        request.endpoint,
        data=json.dumps(request.to_payload()).encode("utf-8"),
        headers=headers,
        method="POST",
    )

    try:
        with urlopen(http_request, timeout=request.request_timeout or 60.0) as response:
            body = response.read()
    except HTTPError as exc:  # pragma: no cover - depends on runtime
        detail = exc.read().decode("utf-8", errors="ignore").strip()
        raise RuntimeError(
            f"LLM HTTP runner failed with status {exc.code}: {detail or exc.reason}"
        ) from exc
    except URLError as exc:
        raise RuntimeError(f"LLM HTTP runner failed: {exc.reason}") from exc
    except (OSError, http.client.HTTPException) as exc:
        raise RuntimeError(f"LLM HTTP runner failed: {exc!r}") from exc

    try:
        decoded = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RuntimeError("LLM HTTP runner returned invalid JSON") from exc
    return _first_choice_text(decoded).strip()


def _first_choice_text(payload: Any) -> str:
    choices = payload.get("choices") if isinstance(payload, dict) else None
    if not choices or not isinstance(choices[0], dict):
        return ""
    choice = choices[0]
    message = choice.get("message")
    content = message.get("content") if isinstance(message, dict) else choice.get("text")
    return content if isinstance(content, str) else ""


def _from_env(keys: Sequence[str]) -> str | None:
    return next((os.environ[key] for key in keys if os.environ.get(key)), None)


__all__ = ["LLMRequest", "LLMRunner", "post_chat_completion"]
