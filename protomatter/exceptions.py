# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Protomatter exception hierarchy.

All errors are contract violations raised synchronously at the offending
call. Nothing in the runtime retries or suppresses them.
"""


class ProtomatterError(Exception):
    """Base exception for all protomatter errors.

    Attributes:
        message: Main error message
        details: Optional list of additional detail lines
    """

    def __init__(self, message: str, details: list[str] | None = None):
        self.message = message
        self.details = details or []
        super().__init__(message)

    def format_for_console(self) -> str:
        """Format error message for rich console output."""
        lines = [f"[red]Error:[/red] {self.message}"]
        if self.details:
            lines.append("")
            for detail in self.details:
                lines.append(f"  • {detail}")
        return "\n".join(lines)


class ConfigurationError(ProtomatterError):
    """Raised for structurally invalid blueprint, composition or mixin input."""
    pass


class MethodNotFoundError(ProtomatterError):
    """Raised when super dispatch finds no ancestor defining the method."""

    def __init__(self, method_name: str, details: list[str] | None = None):
        self.method_name = method_name
        super().__init__(f"Method {method_name} is not defined.", details)


class MixinsDisabledError(ProtomatterError):
    """Raised by mix_in when the owning blueprint disallows mixins."""
    pass
