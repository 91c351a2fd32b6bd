"""
Shared test fixtures: an in-memory image backend and a small tag dictionary.
"""

from typing import Dict, List

import pytest

from photometa.errors import DecodeError, EncodeError, KeyResolutionError, OpenError
from photometa.image_session import ImageFactory
from photometa.models import MetadataEntry, RawValue, TypeTag
from photometa.storage import ImageBackend, ImageHandle, RawMetadata, TagDictionary

EXIF_TYPES = {
    "Exif.Image.Make": TypeTag.ASCII_STRING,
    "Exif.Image.Model": TypeTag.ASCII_STRING,
    "Exif.Image.Artist": TypeTag.ASCII_STRING,
    "Exif.Image.Orientation": TypeTag.UNSIGNED_SHORT,
    "Exif.Image.ImageWidth": TypeTag.UNSIGNED_LONG,
    "Exif.Image.XResolution": TypeTag.UNSIGNED_RATIONAL,
    "Exif.Photo.ExposureTime": TypeTag.UNSIGNED_RATIONAL,
    "Exif.Photo.ExposureBiasValue": TypeTag.SIGNED_RATIONAL,
    "Exif.Photo.ExifVersion": TypeTag.UNDEFINED,
}

# key -> (type, repeatable)
IPTC_TYPES = {
    "Iptc.Envelope.CharacterSet": (TypeTag.STRING, False),
    "Iptc.Envelope.ModelVersion": (TypeTag.UNSIGNED_SHORT, False),
    "Iptc.Application2.Keywords": (TypeTag.STRING, True),
    "Iptc.Application2.Caption": (TypeTag.STRING, False),
    "Iptc.Application2.DateCreated": (TypeTag.DATE, False),
    "Iptc.Application2.TimeCreated": (TypeTag.TIME, False),
}

XMP_PREFIXES = {"dc", "xmp", "photoshop", "exif", "tiff"}


def entry(key: str, tag: TypeTag, components: List, ok: bool = True) -> MetadataEntry:
    """Build an entry directly from typed components."""
    return MetadataEntry(key, RawValue(tag, list(components), ok))


class FakeTagDictionary(TagDictionary):

    def exif_default_type(self, key: str) -> TypeTag:
        if key not in EXIF_TYPES:
            raise KeyResolutionError(key)
        return EXIF_TYPES[key]

    def iptc_dataset_type(self, key: str) -> TypeTag:
        if key not in IPTC_TYPES:
            raise KeyResolutionError(key)
        return IPTC_TYPES[key][0]

    def iptc_dataset_repeatable(self, key: str) -> bool:
        if key not in IPTC_TYPES:
            raise KeyResolutionError(key)
        return IPTC_TYPES[key][1]

    def xmp_key(self, key: str) -> str:
        parts = key.split('.')
        if len(parts) < 3 or parts[0] != "Xmp" or parts[1] not in XMP_PREFIXES:
            raise KeyResolutionError(key)
        return key


class MemoryImageHandle(ImageHandle):

    def __init__(self, backend: 'MemoryBackend', path: str):
        self.backend = backend
        self._path = path
        self.closed = False

    @property
    def path(self) -> str:
        return self._path

    def read_metadata(self) -> RawMetadata:
        if self.backend.fail_read:
            raise DecodeError(f"corrupt metadata in {self._path}")
        stored = self.backend.files[self._path]
        return RawMetadata(
            exif=[e.copy() for e in stored.exif],
            iptc=[e.copy() for e in stored.iptc],
            xmp=[e.copy() for e in stored.xmp],
        )

    def write_metadata(self, exif, iptc, xmp) -> None:
        if self.backend.fail_write:
            raise EncodeError(f"cannot write {self._path}")
        self.backend.files[self._path] = RawMetadata(list(exif), list(iptc), list(xmp))

    def close(self) -> None:
        self.closed = True


class MemoryBackend(ImageBackend):
    """Backend keeping 'files' as RawMetadata in a dict keyed by path."""

    def __init__(self):
        self.files: Dict[str, RawMetadata] = {}
        self.fail_read = False
        self.fail_write = False
        self._dictionary = FakeTagDictionary()

    @property
    def dictionary(self) -> TagDictionary:
        return self._dictionary

    def open_image(self, path: str) -> ImageHandle:
        if path not in self.files:
            raise OpenError(f"No such image: {path}")
        return MemoryImageHandle(self, path)


@pytest.fixture
def dictionary():
    return FakeTagDictionary()


@pytest.fixture
def backend():
    backend = MemoryBackend()
    backend.files["photo.jpg"] = RawMetadata()
    backend.files["copy.jpg"] = RawMetadata()
    return backend


@pytest.fixture
def factory(backend):
    return ImageFactory(backend=backend)


@pytest.fixture
def image(factory):
    session = factory.open_image("photo.jpg")
    session.read_metadata()
    return session
