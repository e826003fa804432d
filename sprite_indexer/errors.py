from __future__ import annotations

"""
Error kinds raised by the conversion stages.

Every failure is fatal for the run. Library code raises; the CLI catches
ConversionError, reports it on stderr and exits 1.
"""


class ConversionError(Exception):
    """Base for all conversion failures."""


class FileAccessError(ConversionError, OSError):
    """A file could not be opened for reading or created for writing."""


class FormatError(ConversionError, ValueError):
    """Input could not be decoded, or is unusable for the conversion."""


class WriteError(ConversionError, OSError):
    """The encoder failed while producing an output image."""


__all__ = ["ConversionError", "FileAccessError", "FormatError", "WriteError"]
