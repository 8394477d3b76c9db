"""Pydantic models for endpoint configuration and config file loading."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from llm_data_analyzer.analyzer.models import ConfigurationError
from llm_data_analyzer.core.utils import print_error_message

# --- Config File Loading ---

CONFIG_PATH = Path.home() / ".config" / "llm-data-analyzer" / "config.toml"
CONFIG_PATH_2 = Path("llm-data-analyzer.toml")


def _normalize_keys(value: Any) -> Any:
    """Turn ``chunk-size`` style keys into ``chunk_size``, in tables and arrays of tables."""
    if isinstance(value, dict):
        return {k.replace("-", "_"): _normalize_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize_keys(item) for item in value]
    return value


def _find_config_file(config_path_str: str | None) -> Path | None:
    if config_path_str:
        return Path(config_path_str).expanduser()
    return next((p for p in (CONFIG_PATH, CONFIG_PATH_2) if p.exists()), None)


def load_config(config_path_str: str | None = None) -> dict[str, Any]:
    """Load the TOML config file, or return ``{}`` when there is none.

    An explicit path that is missing or unparsable is reported on stderr;
    the run then continues with command-line options only.
    """
    config_path = _find_config_file(config_path_str)
    if config_path is None:
        return {}
    if not config_path.exists():
        print_error_message(f"Config file not found at {config_path}")
        return {}
    try:
        with config_path.open("rb") as f:
            return _normalize_keys(tomllib.load(f))
    except tomllib.TOMLDecodeError as e:
        print_error_message(f"Error parsing config file {config_path}: {e}")
        return {}


# --- Pydantic Models for Configuration ---


class EndpointConfig(BaseModel):
    """Configuration for a single OpenAI-compatible LLM endpoint."""

    name: str
    endpoint_url: str
    model: str
    api_key_env: str | None = None
    context_window_size: int = Field(..., gt=0)
    chunk_size: int = Field(..., gt=0)

    @field_validator("endpoint_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def resolve_api_key(self) -> str | None:
        """Read the API key from the configured environment variable."""
        if not self.api_key_env:
            return None
        api_key = os.getenv(self.api_key_env)
        if not api_key:
            msg = f"API key environment variable '{self.api_key_env}' not set"
            raise ConfigurationError(msg)
        return api_key


class AnalyzerSettings(BaseModel):
    """Validated view of the config file."""

    endpoints: list[EndpointConfig] = Field(default_factory=list)
    defaults: dict[str, Any] = Field(default_factory=dict)


def parse_settings(raw: dict[str, Any]) -> AnalyzerSettings:
    """Validate a loaded config dictionary.

    Raises:
        ConfigurationError: If an endpoint entry is malformed.

    """
    try:
        return AnalyzerSettings.model_validate(raw)
    except ValidationError as e:
        msg = f"Invalid configuration: {e}"
        raise ConfigurationError(msg) from e


def select_endpoint(settings: AnalyzerSettings, name: str) -> EndpointConfig:
    """Find an endpoint by name.

    Raises:
        ConfigurationError: If no endpoint with this name is configured.

    """
    for endpoint in settings.endpoints:
        if endpoint.name == name:
            return endpoint
    available = ", ".join(ep.name for ep in settings.endpoints) or "none"
    msg = f"Endpoint '{name}' not found in config file (available: {available})"
    raise ConfigurationError(msg)
