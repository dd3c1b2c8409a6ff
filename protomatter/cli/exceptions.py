# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""CLI-specific exception hierarchy.

Runtime errors (protomatter.exceptions) describe contract violations in user
code; these describe failures of a CLI command and carry an exit code.
"""

from protomatter.exceptions import ProtomatterError

from .constants import ExitCode


class CLIError(ProtomatterError):
    """Base exception for all CLI-related errors.

    Attributes:
        exit_code: Suggested exit code for this error type (class attribute)
    """

    exit_code: int = ExitCode.USAGE


class ConfigFileError(CLIError):
    """Raised when loading or writing a configuration file fails."""

    exit_code = ExitCode.CONFIG


class TargetError(CLIError):
    """Raised when an inspect target cannot be imported or is not a blueprint."""

    exit_code = ExitCode.DATAERR
