"""Custom exception types raised by the kitecli scaffolding utilities."""

from __future__ import annotations

from pathlib import Path

__all__ = ["MissingConfigurationError", "ScaffoldError", "ScaffoldIOError"]


class ScaffoldError(RuntimeError):
    """Base class for failures that abort a single scaffolding invocation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class MissingConfigurationError(ScaffoldError):
    """Raised when a project file required by the command is absent or unreadable."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ScaffoldIOError(ScaffoldError):
    """Raised when probing the project directory fails."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path
