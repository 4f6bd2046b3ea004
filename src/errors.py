"""Error taxonomy for a conversion run.

Every failure aborts the whole run. Each error records the pipeline stage it
came from so the CLI can report where things went wrong.
"""

from __future__ import annotations

STAGE_INPUT = "input"
STAGE_DECODE = "decode"
STAGE_CONVERT = "convert"
STAGE_RENDER = "render"
STAGE_OUTPUT = "output"


class DayOneOrgError(Exception):
    """Base class for all conversion failures."""

    stage: str = "unknown"

    def __init__(self, message: str, *, entry_index: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.entry_index = entry_index
        # Set by the renderer, which knows entries by date rather than index.
        self.entry_date: str | None = None

    def describe(self) -> str:
        """Human-readable one-line description including the stage."""
        where = ""
        if self.entry_index is not None:
            where = f" (entry {self.entry_index})"
        elif self.entry_date is not None:
            where = f" (entry created {self.entry_date})"
        return f"[{self.stage}] {self.message}{where}"


class InputUnavailableError(DayOneOrgError):
    """Raised when the export file cannot be read."""

    stage = STAGE_INPUT


class DecodeError(DayOneOrgError):
    """Raised when the export does not match the expected shape."""

    stage = STAGE_DECODE


class UnknownMoonPhaseError(DecodeError):
    """Raised for a moon phase code outside the known table."""

    def __init__(self, code: str, *, entry_index: int | None = None) -> None:
        super().__init__(f"Unknown moon phase code: {code!r}", entry_index=entry_index)
        self.code = code


class ConversionError(DayOneOrgError):
    """Raised when the external text converter fails."""

    stage = STAGE_CONVERT


class InvariantViolation(DayOneOrgError):
    """Raised when a calendar value falls outside its closed range."""

    stage = STAGE_RENDER


class OutputUnavailableError(DayOneOrgError):
    """Raised when the finished outline cannot be written."""

    stage = STAGE_OUTPUT
