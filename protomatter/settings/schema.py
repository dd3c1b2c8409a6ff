# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Protomatter configuration schema using Pydantic.

Configuration Priority
----------------------
Settings are loaded from multiple sources with the following priority (highest to lowest):
1. Explicit overrides (passed to ProtomatterSettings constructor)
2. Environment variables (PROTOMATTER_* prefix)
3. Project config file (protomatter.yaml)
4. Built-in defaults (Field defaults in ProtomatterSettings)

The project file is found by walking up from CWD, unless
PROTOMATTER_PROJECT_DIR points at a directory to use instead.
"""

import os
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

PROJECT_CONFIG_FILE = "protomatter.yaml"
ENV_PROJECT_DIR = "PROTOMATTER_PROJECT_DIR"

LogLevel = Literal["quiet", "normal", "verbose", "debug"]

# Explicit project file for the settings object currently being built
project_file_override: ContextVar[Path | None] = ContextVar("project_file_override", default=None)


def find_project_config() -> Path | None:
    """Find project configuration file with upward directory walk.

    Search order:
    1. If PROTOMATTER_PROJECT_DIR is set, check that directory only
    2. Otherwise, walk up from CWD to find protomatter.yaml

    Returns:
        Path to config file, or None if not found
    """
    if project_dir_override := os.environ.get(ENV_PROJECT_DIR):
        candidate = Path(project_dir_override).resolve() / PROJECT_CONFIG_FILE
        # Explicit location: don't fall through to the upward walk
        return candidate if candidate.exists() else None

    current = Path.cwd().resolve()
    while current != current.parent:
        candidate = current / PROJECT_CONFIG_FILE
        if candidate.exists():
            return candidate
        current = current.parent
    return None


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading a single protomatter.yaml."""

    def __init__(self, settings_cls: type[BaseSettings], project_file: Path | None = None):
        super().__init__(settings_cls)
        if project_file is None:
            project_file = find_project_config()
        self.project_file_used = project_file if project_file and project_file.is_file() else None
        self._data = self._load_yaml_file()

    def _load_yaml_file(self) -> dict[str, Any]:
        """Load the project file.

        Raises:
            yaml.YAMLError: If the config file has syntax errors
        """
        if self.project_file_used is None:
            return {}

        try:
            with open(self.project_file_used) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            if hasattr(e, "problem_mark"):
                mark = e.problem_mark
                location = f"line {mark.line + 1}, column {mark.column + 1}"
            else:
                location = "unknown location"
            raise yaml.YAMLError(
                f"\n\nInvalid YAML in config file: {self.project_file_used}\n"
                f"Error at {location}: {getattr(e, 'problem', None) or str(e)}\n\n"
                f"Fix the syntax error and try again."
            ) from e

        if not isinstance(data, dict):
            raise yaml.YAMLError(
                f"Config file {self.project_file_used} must contain a mapping at top level"
            )
        return data

    def get_field_value(self, field_name: str, field_info: Any) -> tuple[Any, str, bool]:
        if field_name in self._data:
            return self._data[field_name], field_name, True
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._data.copy()


class ProtomatterSettings(BaseSettings):
    """Runtime configuration with hierarchical priority."""

    allow_mixins: bool = Field(
        default=True,
        description="Default for create(allow_mixins=...) when not given explicitly",
    )
    private_key: str = Field(
        default="private",
        description="Property-bag key holding the private-method mapping",
    )
    statics_key: str = Field(
        default="statics",
        description="Property-bag key holding members hidden on instances",
    )
    log_level: LogLevel = Field(
        default="normal",
        description="Console verbosity level: quiet | normal | verbose | debug",
    )

    model_config = SettingsConfigDict(
        env_prefix="PROTOMATTER_",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False,
        env_file=None,  # Config files handled via custom source
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority order (first source wins): init, env, YAML, defaults."""
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls, project_file_override.get()),
        )

    @field_validator("private_key", "statics_key")
    @classmethod
    def validate_reserved_key(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"reserved key must be a valid identifier, got {value!r}")
        return value

    @model_validator(mode="after")
    def validate_distinct_keys(self) -> "ProtomatterSettings":
        if self.private_key == self.statics_key:
            raise ValueError("private_key and statics_key must differ")
        return self
