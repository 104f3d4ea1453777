"""Exception types raised by the universe engine."""

from __future__ import annotations


class UniverseError(Exception):
    """Base class for Astral Surveyor errors."""


class GenerationError(UniverseError):
    """A generator failed while building a chunk."""

    def __init__(self, cx: int, cy: int, cause: BaseException) -> None:
        super().__init__(f"failed to generate chunk ({cx}, {cy}): {cause!r}")
        self.cx = cx
        self.cy = cy
        self.cause = cause


class IdentityError(UniverseError, ValueError):
    """An identity key could not be parsed."""
