"""Exceptions raised by the spot pipeline."""


class PipelineError(Exception):
    """Base exception for pipeline processing errors."""

    pass


class InputError(PipelineError):
    """Exception raised when input data is invalid or unavailable."""

    pass


class ProcessingError(PipelineError):
    """Exception raised when processing fails."""

    pass


class StructuringElementError(ProcessingError, ValueError):
    """Exception raised for degenerate structuring element parameters."""

    pass
