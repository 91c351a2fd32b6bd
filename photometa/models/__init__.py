"""
Domain models for image metadata values.

Type tags, text encodings and the typed entries stored in EXIF, IPTC and XMP
containers.
"""

from .type_tag import TypeTag
from .encoding import EncodingTag, IPTC_DEFAULT_ENCODING
from .metadata_entry import MetadataEntry, Namespace, RawValue

__all__ = [
    'TypeTag',
    'EncodingTag',
    'IPTC_DEFAULT_ENCODING',
    'MetadataEntry',
    'Namespace',
    'RawValue',
]
