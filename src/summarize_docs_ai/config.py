"""
Configuration management for summarize-docs-ai.

Handles loading configuration from YAML files and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if present (before Settings initialization)
load_dotenv()


class ServerConfig(BaseModel):
    """Configuration for the HTTP boundary."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=list)


class VendorConfig(BaseModel):
    """Per-vendor model and endpoint settings."""

    model: str
    base_url: str
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    api_version: str | None = None


class ProvidersConfig(BaseModel):
    """Configuration for the three upstream LLM vendors."""

    default: str = Field(default="mistral")
    openai: VendorConfig = Field(
        default_factory=lambda: VendorConfig(
            model="gpt-4o-mini",
            base_url="https://api.openai.com/v1/chat/completions",
            temperature=0.7,
        )
    )
    mistral: VendorConfig = Field(
        default_factory=lambda: VendorConfig(
            model="mistral-small-latest",
            base_url="https://api.mistral.ai/v1/chat/completions",
            temperature=0.7,
        )
    )
    anthropic: VendorConfig = Field(
        default_factory=lambda: VendorConfig(
            model="claude-3-5-haiku-latest",
            base_url="https://api.anthropic.com/v1/messages",
            api_version="2023-06-01",
        )
    )

    def for_provider(self, provider: str) -> VendorConfig | None:
        """Look up the vendor section by provider id, or None if absent."""
        value = getattr(self, provider.replace("-", "_"), None)
        return value if isinstance(value, VendorConfig) else None


class RouterConfig(BaseModel):
    """Configuration for the provider router."""

    # Upstream calls are bounded; there are no retries.
    request_timeout: float = Field(default=60.0, gt=0.0, le=600.0)
    connect_timeout: float = Field(default=10.0, gt=0.0, le=120.0)
    grammar_max_tokens: int = Field(default=1024, ge=1, le=32000)
    # Output budget = floor(len(text) * length_factor * token_budget_ratio)
    token_budget_ratio: float = Field(default=1.0, gt=0.0, le=10.0)
    min_output_tokens: int = Field(default=1, ge=1)
    max_output_tokens: int | None = Field(default=None, ge=1)


class ExtractionConfig(BaseModel):
    """Configuration for document text extraction."""

    max_upload_mb: int = Field(default=10, ge=1, le=200)

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


class HistoryConfig(BaseModel):
    """Configuration for the CLI's local history and API settings records."""

    path: Path = Field(default=Path("~/.summarize-docs/history.json"), validate_default=True)
    api_settings_path: Path = Field(
        default=Path("~/.summarize-docs/api_settings.json"), validate_default=True
    )
    max_items: int = Field(default=10, ge=1, le=1000)

    @field_validator("path", "api_settings_path")
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        """Expand user home directory and make path absolute."""
        return Path(v).expanduser().resolve()


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO")
    file: Path | None = Field(default=None)
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    max_file_size_mb: int = Field(default=10, ge=1, le=100)
    backup_count: int = Field(default=5, ge=1, le=20)

    @field_validator("level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()


class Settings(BaseSettings):
    """Main settings class that combines all configurations."""

    model_config = SettingsConfigDict(
        env_prefix="SUMMARIZE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    server: ServerConfig = Field(default_factory=ServerConfig)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    router: RouterConfig = Field(default_factory=RouterConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> Settings:
        """Load settings from a YAML file, with environment variable overrides."""
        path = Path(path)
        if not path.exists():
            # Return defaults if file doesn't exist
            return cls()

        with open(path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        yaml_config = _substitute_env_vars(yaml_config)

        return cls(**yaml_config)


def _substitute_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively substitute ${ENV_VAR} patterns in config values."""
    return {key: _substitute_value(value) for key, value in config.items()}


def _substitute_value(value: Any) -> Any:
    if isinstance(value, dict):
        return _substitute_env_vars(value)
    if isinstance(value, list):
        return [_substitute_value(item) for item in value]
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.getenv(value[2:-1], "")
    return value


DEFAULT_CONFIG_PATHS = (
    Path("config.yaml"),
    Path("config.yml"),
    Path(".summarize-docs.yaml"),
)


def load_config(path: Path | str | None = None) -> Settings:
    """
    Load configuration from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, looks for config.yaml in current directory.

    Returns:
        Settings instance with merged YAML and environment configurations.
    """
    if path is None:
        for p in DEFAULT_CONFIG_PATHS:
            if p.exists():
                path = p
                break

    if path is not None:
        return Settings.from_yaml(path)

    return Settings()


def api_key_from_env(provider: str) -> str:
    """
    Resolve an API key for a provider from the environment.

    ``SUMMARIZE_API_KEY`` wins over the vendor-specific variable
    (``OPENAI_API_KEY``, ``MISTRAL_API_KEY``, ``ANTHROPIC_API_KEY``).
    """
    generic = os.getenv("SUMMARIZE_API_KEY", "")
    if generic:
        return generic
    env_name = f"{provider.upper().replace('-', '_')}_API_KEY"
    return os.getenv(env_name, "")


DEFAULT_CONFIG = """# summarize-docs-ai configuration

server:
  host: 127.0.0.1
  port: 8000
  cors_origins: []

providers:
  # openai, mistral or anthropic
  default: mistral
  openai:
    model: gpt-4o-mini
    base_url: https://api.openai.com/v1/chat/completions
    temperature: 0.7
  mistral:
    model: mistral-small-latest
    base_url: https://api.mistral.ai/v1/chat/completions
    temperature: 0.7
  anthropic:
    model: claude-3-5-haiku-latest
    base_url: https://api.anthropic.com/v1/messages
    api_version: "2023-06-01"

router:
  # Seconds before an upstream call is abandoned
  request_timeout: 60
  # Fixed output budget for grammar checks
  grammar_max_tokens: 1024
  # Summary budget = floor(len(text) * length * token_budget_ratio)
  token_budget_ratio: 1.0
  min_output_tokens: 1

extraction:
  max_upload_mb: 10

history:
  path: ~/.summarize-docs/history.json
  api_settings_path: ~/.summarize-docs/api_settings.json
  max_items: 10

logging:
  level: INFO
  # file: ./logs/summarize-docs.log
"""


def create_default_config(path: Path | str = "config.yaml") -> Path:
    """Create a default configuration file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(DEFAULT_CONFIG)
    return path
