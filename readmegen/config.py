"""Configuration loading for readmegen (.readmegen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".readmegen.yml"


@dataclass
class LLMConfig:
    """Model runtime settings."""

    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    request_timeout: Optional[float] = None


@dataclass
class RepositoryConfig:
    """Bounds on repository content threaded into prompts."""

    max_file_chars: int = 12000


@dataclass
class ExpansionConfig:
    """Policy applied after a detail-expansion run."""

    enforce_growth: bool = False


@dataclass
class ServiceConfig:
    """HTTP service bind address."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class ReadmeGenConfig:
    """Represents the settings defined in .readmegen.yml."""

    root: Path
    llm: Optional[LLMConfig] = None
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    expansion: ExpansionConfig = field(default_factory=ExpansionConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    templates_dir: Optional[Path] = None


def load_config(config_path: Path) -> ReadmeGenConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ReadmeGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    llm_data = _as_dict(data.get("llm"))
    llm = None
    if llm_data:
        llm = LLMConfig(
            model=_as_str(llm_data.get("model")),
            base_url=_as_str(llm_data.get("base_url")),
            api_key=_as_str(llm_data.get("api_key")),
            temperature=_as_float(llm_data.get("temperature")),
            max_tokens=_as_int(llm_data.get("max_tokens")),
            request_timeout=_as_float(llm_data.get("request_timeout")),
        )
        if not any(vars(llm).values()):
            llm = None

    repository = RepositoryConfig()
    repository_data = _as_dict(data.get("repository"))
    max_chars = _as_int(repository_data.get("max_file_chars"))
    if max_chars is not None:
        if max_chars <= 0:
            raise ConfigError("repository.max_file_chars must be a positive integer")
        repository.max_file_chars = max_chars

    expansion = ExpansionConfig()
    enforce = _as_bool(_as_dict(data.get("expansion")).get("enforce_growth"))
    if enforce is not None:
        expansion.enforce_growth = enforce

    service = ServiceConfig()
    service_data = _as_dict(data.get("service"))
    host = _as_str(service_data.get("host"))
    port = _as_int(service_data.get("port"))
    if host:
        service.host = host
    if port is not None:
        service.port = port

    templates_dir_str = _as_str(data.get("templates_dir"))
    templates_dir = root / templates_dir_str if templates_dir_str else None

    return ReadmeGenConfig(
        root=root,
        llm=llm,
        repository=repository,
        expansion=expansion,
        service=service,
        templates_dir=templates_dir,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    return _as_number(value, float)


def _as_int(value: Any) -> Optional[int]:
    return _as_number(value, int)


def _as_number(value: Any, kind: Callable[[Any], Any]) -> Any:
    # YAML booleans are ints in Python; never read them as numbers.
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    if kind is int and isinstance(value, float):
        return None
    try:
        return kind(value)
    except ValueError:
        return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ExpansionConfig",
    "LLMConfig",
    "ReadmeGenConfig",
    "RepositoryConfig",
    "ServiceConfig",
    "load_config",
]
