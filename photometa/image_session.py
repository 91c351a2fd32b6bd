"""
Image Session

Owns one opened image and its EXIF, IPTC and XMP containers, and hands out
the views callers use to read and change them.
"""

import logging
from typing import Any, Dict, Optional

from .config import DEFAULT_CONFIG_PATH, DEFAULTS, load_config
from .containers import ExifData, IptcData, NamespaceContainer, XmpData
from .errors import OpenError
from .models import Namespace
from .storage import ImageBackend, ImageHandle, TagDictionary, create_image_backend

logger = logging.getLogger(__name__)


class ImageSession:
    """
    One opened image with its three metadata containers.

    Views returned by ``exif_data``, ``iptc_data`` and ``xmp_data`` hold a
    reference to the session and operate on its containers directly.

    Attributes:
        dictionary: Tag dictionary used to type new entries
        decode_errors: ``bytes.decode`` error policy for text values

    Example:
        >>> with ImageFactory.open('/photos/DSC05760.JPG') as image:
        ...     image.read_metadata()
        ...     image.iptc_data().add('Iptc.Application2.Keywords', 'concert')
        ...     image.write_metadata()
    """

    def __init__(self, handle: ImageHandle, dictionary: TagDictionary,
                 decode_errors: str = 'replace'):
        self._handle: Optional[ImageHandle] = handle
        self.dictionary = dictionary
        self.decode_errors = decode_errors
        self._containers: Dict[Namespace, NamespaceContainer] = {
            namespace: NamespaceContainer(namespace) for namespace in Namespace
        }

    @property
    def path(self) -> Optional[str]:
        return self._handle.path if self._handle else None

    def container(self, namespace: Namespace) -> NamespaceContainer:
        return self._containers[namespace]

    def exif_data(self) -> ExifData:
        return ExifData(self)

    def iptc_data(self) -> IptcData:
        return IptcData(self)

    def xmp_data(self) -> XmpData:
        return XmpData(self)

    def read_metadata(self) -> None:
        """
        Load all metadata from the file, replacing the current containers.

        Raises:
            DecodeError: If the file's metadata is corrupt; containers keep
                their previous contents
        """
        handle = self._require_handle()
        raw = handle.read_metadata()

        self._containers[Namespace.EXIF].replace(raw.exif)
        self._containers[Namespace.IPTC].replace(raw.iptc)
        self._containers[Namespace.XMP].replace(raw.xmp)
        logger.info(
            f"Read metadata from {handle.path}: {len(raw.exif)} EXIF, "
            f"{len(raw.iptc)} IPTC, {len(raw.xmp)} XMP"
        )

    def write_metadata(self) -> None:
        """
        Persist the current containers to the file.

        Raises:
            EncodeError: If writing fails; containers are left as they were
        """
        handle = self._require_handle()
        handle.write_metadata(
            self._containers[Namespace.EXIF].copy().entries(),
            self._containers[Namespace.IPTC].copy().entries(),
            self._containers[Namespace.XMP].copy().entries(),
        )
        logger.info(f"Wrote metadata to {handle.path}")

    def copy_metadata_to(self, other: 'ImageSession') -> bool:
        """
        Replace ``other``'s containers with a snapshot of this session's.

        Later changes to either session do not affect the other.
        """
        for namespace, container in self._containers.items():
            other.container(namespace).replace(container.copy())
        logger.info(f"Copied metadata from {self.path} to {other.path}")
        return True

    def clear(self) -> bool:
        """Empty the EXIF, IPTC and XMP containers."""
        for container in self._containers.values():
            container.clear()
        return True

    def close(self) -> None:
        """Release the image handle. Containers stay readable."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> 'ImageSession':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_handle(self) -> ImageHandle:
        if self._handle is None:
            raise OpenError("Image session is closed")
        return self._handle


class ImageFactory:
    """
    Opens images as sessions through a configured backend.

    Attributes:
        backend: Image backend used to open files
        decode_errors: Error policy passed to every session

    Example:
        >>> factory = ImageFactory.from_config('config.yaml')
        >>> image = factory.open_image('/photos/DSC05760.JPG')
    """

    def __init__(self, backend: Optional[ImageBackend] = None, decode_errors: str = 'replace'):
        self.backend = backend or create_image_backend(DEFAULTS)
        self.decode_errors = decode_errors

    @classmethod
    def from_config(cls, config_path: str = DEFAULT_CONFIG_PATH) -> 'ImageFactory':
        """
        Create an ImageFactory from a configuration file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Configured ImageFactory instance
        """
        return cls.from_settings(load_config(config_path))

    @classmethod
    def from_settings(cls, config: Dict[str, Any]) -> 'ImageFactory':
        return cls(
            backend=create_image_backend(config),
            decode_errors=config.get('decoding', {}).get('errors', 'replace'),
        )

    def open_image(self, path: str) -> ImageSession:
        """
        Open an image file.

        Raises:
            OpenError: If the path is unreadable or the format unsupported
        """
        handle = self.backend.open_image(path)
        logger.info(f"Opened image: {path}")
        return ImageSession(handle, self.backend.dictionary, self.decode_errors)

    @classmethod
    def open(cls, path: str) -> ImageSession:
        """Open an image with the default backend."""
        return cls().open_image(path)


def open_image(path: str) -> ImageSession:
    return ImageFactory.open(path)
