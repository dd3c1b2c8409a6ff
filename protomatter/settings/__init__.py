# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Protomatter configuration module.

Provides type-safe configuration management with Pydantic Settings.
"""

from .loader import get_config, get_default_config, load_config, reset_config
from .schema import PROJECT_CONFIG_FILE, ProtomatterSettings, find_project_config

__all__ = [
    "ProtomatterSettings",
    "PROJECT_CONFIG_FILE",
    "find_project_config",
    "load_config",
    "get_config",
    "reset_config",
    "get_default_config",
]
