"""Exception hierarchy for stackchart."""

from __future__ import annotations


class StackChartError(Exception):
    """Base exception for all stackchart errors."""

    pass


class InvalidArgumentError(StackChartError, ValueError):
    """Raised when a required argument is missing."""

    def __init__(self, argument: str, message: str | None = None) -> None:
        self.argument = argument
        super().__init__(
            message or f"{argument} is a required argument and must be defined"
        )


class UnsupportedFormatError(StackChartError):
    """Raised when an input file cannot be loaded."""

    def __init__(self, path: str, suffix: str) -> None:
        self.path = path
        self.suffix = suffix
        super().__init__(f"Unsupported file format '{suffix}' for {path}")
