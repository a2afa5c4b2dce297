"""Configuration loading and validation for linkmender."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from linkmender.core.errors import ConfigError

DEFAULT_CONFIG_PATH = "~/.linkmender/config.yaml"


class LinkmenderConfig(BaseModel):
    """Top-level linkmender configuration."""

    root: str = Field(description="Corpus directory containing the documents")
    document_extension: str = Field(default=".md", description="Extension of tracked documents")
    rewrite_display_text: bool = Field(
        default=False,
        description="Replace display text with the new base name when a document moves",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("document_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Validate the extension starts with a dot and names something."""
        if not v.startswith(".") or len(v) < 2:
            raise ValueError(f"Invalid document extension: {v!r}. Expected e.g. '.md'.")
        return v

    @property
    def root_path(self) -> Path:
        """Corpus root with ~ expanded."""
        return Path(self.root).expanduser()


def load_config(path: str | None = None, root: str | None = None) -> LinkmenderConfig:
    """Load and validate configuration from a YAML file.

    Environment variable overrides:
        LINKMENDER_ROOT: overrides root
        LINKMENDER_DOCUMENT_EXTENSION: overrides document_extension

    A missing file at the default location is not an error when a root is
    given explicitly or through the environment.

    Args:
        path: Path to config file. Defaults to ~/.linkmender/config.yaml.
        root: Corpus root, taking precedence over file and environment.

    Returns:
        Validated LinkmenderConfig.

    Raises:
        ConfigError: If config file is missing, unreadable, or invalid.
    """
    config_path = Path(path or DEFAULT_CONFIG_PATH).expanduser()
    data: dict = {}

    if config_path.exists():
        try:
            raw = config_path.read_text()
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}") from e

        try:
            loaded = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError("Config file must contain a YAML mapping")
        data = loaded
    elif path is not None or not (root or os.environ.get("LINKMENDER_ROOT")):
        raise ConfigError(f"Config file not found: {config_path}")

    # Apply environment variable overrides
    env_root = os.environ.get("LINKMENDER_ROOT")
    if env_root:
        data["root"] = env_root

    env_extension = os.environ.get("LINKMENDER_DOCUMENT_EXTENSION")
    if env_extension:
        data["document_extension"] = env_extension

    if root:
        data["root"] = root

    try:
        return LinkmenderConfig(**data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
