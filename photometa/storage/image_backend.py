"""
Image Backend

Interface to the image library that parses and writes image files and owns
the EXIF/IPTC/XMP tag dictionaries. Sessions talk to the library only
through these classes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from ..models import MetadataEntry, TypeTag


@dataclass
class RawMetadata:
    """
    Entries read from one image, per namespace, in file order.

    Attributes:
        exif: EXIF entries
        iptc: IPTC entries
        xmp: XMP entries
    """

    exif: List[MetadataEntry] = field(default_factory=list)
    iptc: List[MetadataEntry] = field(default_factory=list)
    xmp: List[MetadataEntry] = field(default_factory=list)


class TagDictionary(ABC):
    """
    Key to type lookups for the three namespaces.

    Every method raises KeyResolutionError for keys the library does not know.
    """

    @abstractmethod
    def exif_default_type(self, key: str) -> TypeTag:
        """Default type of the EXIF tag and IFD named by ``key``."""
        pass

    @abstractmethod
    def iptc_dataset_type(self, key: str) -> TypeTag:
        """Type of the IPTC dataset named by ``key``."""
        pass

    @abstractmethod
    def iptc_dataset_repeatable(self, key: str) -> bool:
        """Whether the IPTC dataset named by ``key`` may occur more than once."""
        pass

    @abstractmethod
    def xmp_key(self, key: str) -> str:
        """Validate an XMP key and return it in canonical form."""
        pass


class ImageHandle(ABC):
    """An opened image file."""

    @property
    @abstractmethod
    def path(self) -> str:
        pass

    @abstractmethod
    def read_metadata(self) -> RawMetadata:
        """
        Read all metadata from the file.

        Raises:
            DecodeError: If a metadata block is corrupt
        """
        pass

    @abstractmethod
    def write_metadata(self, exif: List[MetadataEntry], iptc: List[MetadataEntry],
                       xmp: List[MetadataEntry]) -> None:
        """
        Replace the file's metadata with the given entries.

        Raises:
            EncodeError: If the file cannot be written
        """
        pass

    def close(self) -> None:
        """Release library resources held for the file."""
        pass


class ImageBackend(ABC):
    """
    Image library entry point.

    Example:
        >>> backend = create_image_backend('config.yaml')
        >>> handle = backend.open_image('/photos/DSC05760.JPG')
    """

    @abstractmethod
    def open_image(self, path: str) -> ImageHandle:
        """
        Open an image file.

        Raises:
            OpenError: If the path is unreadable or the format unsupported
        """
        pass

    @property
    @abstractmethod
    def dictionary(self) -> TagDictionary:
        pass


def create_image_backend(config: dict) -> ImageBackend:
    """
    Factory function to create an image backend from configuration.

    Args:
        config: Loaded configuration (see ``photometa.config.load_config``)

    Returns:
        Configured ImageBackend instance

    Raises:
        ValueError: If the configured backend type is unknown
    """
    backend_config = config.get('backend', {})
    backend_type = backend_config.get('type', 'exiv2')

    if backend_type == 'exiv2':
        from .exiv2_backend import Exiv2Backend
        return Exiv2Backend()

    else:
        raise ValueError(f"Unsupported backend type: {backend_type}")
