# ABOUTME: Error taxonomy for model conversion
# ABOUTME: Three mutually exclusive kinds surfaced by the conversion orchestrator

from typing import Optional


class ConverterError(Exception):
    """Base class for every error raised by the conversion pipeline."""


class UnsupportedFormatError(ConverterError):
    """
    Raised when a format tag is outside the supported input or output set.

    Attributes:
        format: The offending format value as supplied by the caller
        direction: 'input' or 'output', or None when not known
    """

    def __init__(self, format: str, direction: Optional[str] = None):
        self.format = format
        self.direction = direction
        if direction:
            message = f"Unsupported {direction} format: {format}"
        else:
            message = f"Unsupported format: {format}"
        super().__init__(message)


class SlicedFileError(ConverterError):
    """Raised when an archive contains toolpath instructions instead of geometry."""

    def __init__(self, format: str = '3MF'):
        self.format = format
        super().__init__(
            f"Sliced {format} files are not supported. Please use unsliced model files."
        )


class ConversionError(ConverterError):
    """
    Catch-all conversion failure.

    The wrapped exception is kept on ``cause`` and, when raised with
    ``raise ... from``, on ``__cause__`` as well.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


__all__ = [
    'ConverterError',
    'UnsupportedFormatError',
    'SlicedFileError',
    'ConversionError',
]
