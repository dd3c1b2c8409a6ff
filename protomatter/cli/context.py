# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations  # PEP 563: Postponed evaluation of annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

# Type hints only - settings imported lazily inside methods
if TYPE_CHECKING:
    from protomatter.settings import ProtomatterSettings

logger = logging.getLogger(__name__)


@dataclass
class ApplicationContext:
    """CLI execution context holding the loaded settings."""

    config_file: Path | None = None
    log_level: str | None = None
    config: "ProtomatterSettings | None" = None

    @classmethod
    def from_cli_args(cls, config_file: Path | None, log_level: str | None) -> "ApplicationContext":
        """Create context from CLI arguments, configure logging and load settings."""
        from protomatter._internal.logging import setup_logging

        context = cls(config_file=config_file, log_level=log_level)
        settings = context.get_effective_config()
        setup_logging(level=settings.log_level)
        logger.debug("CLI initialized with config_file=%s, log_level=%s",
                     config_file, settings.log_level)
        return context

    def load_configuration(self) -> None:
        from protomatter.settings import load_config

        # CLI flags win over env, project file and defaults
        self.config = load_config(project_file=self.config_file, log_level=self.log_level)

    def get_effective_config(self) -> "ProtomatterSettings":
        if not self.config:
            self.load_configuration()
        return self.config
