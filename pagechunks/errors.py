"""Exceptions raised by the page chunk pipeline."""

from __future__ import annotations

from typing import Iterable


class PageChunksError(RuntimeError):
    """Base class for page chunk build failures."""


class ConfigurationError(PageChunksError):
    """Raised when the build is configured in a way the pipeline cannot honor."""


class InvariantViolation(PageChunksError):
    """Raised when the compiled chunk graph disagrees with the resolved pages."""

    def __init__(
        self,
        message: str,
        *,
        missing: Iterable[str] = (),
        unexpected: Iterable[str] = (),
    ) -> None:
        self.missing = sorted(missing)
        self.unexpected = sorted(unexpected)
        details: list[str] = []
        if self.missing:
            details.append(f"missing: {', '.join(self.missing)}")
        if self.unexpected:
            details.append(f"unexpected: {', '.join(self.unexpected)}")
        if details:
            message = f"{message} ({'; '.join(details)})"
        super().__init__(message)
