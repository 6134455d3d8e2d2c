"""Errors raised by the core and adapters.

Commands catch `VoltError` at the boundary, print the message and exit 1.
"""

from __future__ import annotations


class VoltError(Exception):
    """Base class for expected, user-facing failures."""


class ProjectNotFoundError(VoltError):
    def __init__(self) -> None:
        super().__init__(
            "Not inside a Volt project. Run this command from a Volt project directory, "
            "or create a new project with: volt new <name>"
        )


class InvalidNameError(VoltError):
    """A model/controller/project name cannot be used."""


class InvalidProviderError(VoltError):
    def __init__(self, value: str, valid: list[str]) -> None:
        super().__init__(f"Invalid database provider '{value}'. Valid options: {', '.join(valid)}")
        self.value = value


class TemplateNotFoundError(VoltError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Template '{name}' not found in the Volt template directory.")
        self.name = name
