"""
Containers package: namespace storage and the views handed to callers.
"""

from .namespace_container import NamespaceContainer
from .metadata_data import ExifData, IptcData, MetadataData, XmpData

__all__ = [
    'NamespaceContainer',
    'MetadataData',
    'ExifData',
    'IptcData',
    'XmpData',
]
