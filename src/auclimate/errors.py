"""
Exception hierarchy for the report pipeline.

Every failure is fatal for a run; there is no retry or partial recovery.
"""


class ClimateReportError(Exception):
    """Base class for all pipeline errors."""


class SourceUnavailableError(ClimateReportError):
    """A data source could not be read (network or file I/O failure)."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Source unavailable: {source} ({reason})")


class ParseError(ClimateReportError):
    """Data did not conform to the expected column types or formats."""


class PipelineStageError(ClimateReportError):
    """
    Wraps an error raised inside a pipeline stage.

    Attributes:
        stage: Name of the failing stage (load, normalize, join, ...).
        cause: The original exception.
    """

    def __init__(self, stage: str, cause: Exception) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"Stage '{stage}' failed: {cause}")
