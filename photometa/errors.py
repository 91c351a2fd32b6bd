"""
Errors

Exception taxonomy for image metadata access. Backends translate their
library-specific failures into these classes; nothing above the backend
layer sees a foreign exception.
"""


class MetadataError(Exception):
    """Base class for every error raised by photometa."""


class OpenError(MetadataError):
    """The image path is missing, unreadable or in an unsupported format."""


class DecodeError(MetadataError):
    """A metadata block in the image could not be read."""


class EncodeError(MetadataError):
    """Metadata could not be written back to the image."""


class KeyResolutionError(MetadataError):
    """A metadata key is not known to the tag dictionary."""

    def __init__(self, key: str, reason: str = ''):
        self.key = key
        message = f"Unknown metadata key: {key}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ValueParseError(MetadataError, ValueError):
    """Text does not fit the type expected for a metadata key."""
