"""
Storage package: access to image files through an image library.
"""

from .image_backend import (
    ImageBackend,
    ImageHandle,
    RawMetadata,
    TagDictionary,
    create_image_backend,
)

__all__ = [
    'ImageBackend',
    'ImageHandle',
    'RawMetadata',
    'TagDictionary',
    'create_image_backend',
]
