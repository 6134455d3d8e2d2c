"""Result of a generate/destroy/new operation."""

from __future__ import annotations

from dataclasses import dataclass, field

from volt.core.domain.models import FileAction, FileActionKind


@dataclass
class GenerationResult:
    """File actions in the order they happened, plus warnings for the user."""

    actions: list[FileAction] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add(self, action: FileAction | None) -> None:
        if action is not None:
            self.actions.append(action)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def paths(self, kind: FileActionKind) -> list[str]:
        return [a.path for a in self.actions if a.kind is kind]

    @property
    def created(self) -> list[str]:
        return self.paths(FileActionKind.CREATED)
