"""
photometa - typed access to EXIF, IPTC and XMP image metadata.

Reads metadata entries through an image library, decodes them into Python
values according to their type tags, and encodes Python values back into
typed entries for writing.

Example:
    >>> import photometa
    >>> image = photometa.open_image('/photos/DSC05760.JPG')
    >>> image.read_metadata()
    >>> dict(image.exif_data())
"""

from .errors import (
    MetadataError,
    OpenError,
    DecodeError,
    EncodeError,
    KeyResolutionError,
    ValueParseError,
)
from .image_session import ImageFactory, ImageSession, open_image
from .containers import ExifData, IptcData, XmpData

__version__ = '0.1.0'

__all__ = [
    'ImageFactory',
    'ImageSession',
    'open_image',
    'ExifData',
    'IptcData',
    'XmpData',
    'MetadataError',
    'OpenError',
    'DecodeError',
    'EncodeError',
    'KeyResolutionError',
    'ValueParseError',
]
