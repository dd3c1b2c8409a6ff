# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Configuration loading and management for Protomatter."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
from unittest.mock import patch

from pydantic import ValidationError
from rich.console import Console

from .schema import ProtomatterSettings, project_file_override

console = Console(stderr=True)


def load_config(
    project_file: Optional[Path] = None,
    **overrides: Any
) -> ProtomatterSettings:
    """Load configuration with hierarchical priority.

    Priority order (highest to lowest):
    1. Explicit overrides (passed as kwargs)
    2. Environment variables (PROTOMATTER_* prefix)
    3. Project config file (protomatter.yaml)
    4. Built-in defaults

    Args:
        project_file: Path to project config file (for non-standard locations)
        **overrides: Field overrides, e.g. from CLI flags

    Returns:
        ProtomatterSettings object
    """
    overrides = {key: value for key, value in overrides.items() if value is not None}
    token = project_file_override.set(Path(project_file) if project_file else None)
    try:
        return ProtomatterSettings(**overrides)
    except ValidationError as e:
        console.print("[bold red]Configuration validation failed:[/bold red]")
        for error in e.errors():
            field = " → ".join(str(x) for x in error["loc"])
            console.print(f"  [red]{field}: {error['msg']}[/red]")
        raise
    finally:
        project_file_override.reset(token)


@lru_cache(maxsize=1)
def get_config() -> ProtomatterSettings:
    """Get cached configuration instance."""
    return load_config()


def reset_config() -> None:
    """Reset the cached configuration (mainly for testing)."""
    get_config.cache_clear()


def get_default_config() -> ProtomatterSettings:
    """Get a configuration instance with only default values (no files or env vars)."""
    filtered_env = {
        k: v for k, v in os.environ.items()
        if not k.startswith('PROTOMATTER_')
    }

    with patch.dict(os.environ, filtered_env, clear=True):
        # Prevent loading config files
        return load_config(project_file=Path('/dev/null'))
