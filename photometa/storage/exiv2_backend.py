"""
Exiv2 Backend

Image backend built on the exiv2 C++ library through its Python binding
(``pip install exiv2``). Library exceptions are translated into photometa
errors here and nowhere else.
"""

import logging
import warnings
from typing import List, Optional

import exiv2

from ..errors import DecodeError, EncodeError, KeyResolutionError, OpenError, ValueParseError
from ..models import MetadataEntry, Namespace, RawValue, TypeTag
from ..models.type_tag import ARRAY_TAGS, TEXT_TAGS
from ..translators.value_encoder import parse_value, split_lang_alt
from .image_backend import ImageBackend, ImageHandle, RawMetadata, TagDictionary

logger = logging.getLogger(__name__)

# EXIF and IPTC text carried as raw bytes; dates, times and comments go
# through their text form
WIRE_TEXT_TAGS = TEXT_TAGS - {TypeTag.DATE, TypeTag.TIME, TypeTag.COMMENT}


class Exiv2TagDictionary(TagDictionary):
    """Tag dictionary backed by exiv2's built-in EXIF, IPTC and XMP tables."""

    def exif_default_type(self, key: str) -> TypeTag:
        try:
            exif_key = exiv2.ExifKey(key)
        except exiv2.Exiv2Error as e:
            raise KeyResolutionError(key, str(e)) from e
        return TypeTag.from_code(int(exif_key.defaultTypeId()))

    def iptc_dataset_type(self, key: str) -> TypeTag:
        iptc_key = self._iptc_key(key)
        type_id = exiv2.IptcDataSets.dataSetType(iptc_key.tag(), iptc_key.record())
        return TypeTag.from_code(int(type_id))

    def iptc_dataset_repeatable(self, key: str) -> bool:
        iptc_key = self._iptc_key(key)
        return bool(exiv2.IptcDataSets.dataSetRepeatable(iptc_key.tag(), iptc_key.record()))

    def xmp_key(self, key: str) -> str:
        try:
            return exiv2.XmpKey(key).key()
        except exiv2.Exiv2Error as e:
            raise KeyResolutionError(key, str(e)) from e

    @staticmethod
    def _iptc_key(key: str):
        try:
            return exiv2.IptcKey(key)
        except exiv2.Exiv2Error as e:
            raise KeyResolutionError(key, str(e)) from e


class Exiv2ImageHandle(ImageHandle):
    """
    Image opened through exiv2.

    Attributes:
        image: The exiv2 Image object
    """

    def __init__(self, path: str, image):
        self._path = path
        self.image = image

    @property
    def path(self) -> str:
        return self._path

    def read_metadata(self) -> RawMetadata:
        try:
            self.image.readMetadata()
        except exiv2.Exiv2Error as e:
            raise DecodeError(f"Cannot read metadata from {self._path}: {e}") from e

        metadata = RawMetadata(
            exif=_load_entries(self.image.exifData(), Namespace.EXIF),
            iptc=_load_entries(self.image.iptcData(), Namespace.IPTC),
            xmp=_load_entries(self.image.xmpData(), Namespace.XMP),
        )
        logger.debug(
            f"Read {len(metadata.exif)} EXIF, {len(metadata.iptc)} IPTC and "
            f"{len(metadata.xmp)} XMP entries from {self._path}"
        )
        return metadata

    def write_metadata(self, exif: List[MetadataEntry], iptc: List[MetadataEntry],
                       xmp: List[MetadataEntry]) -> None:
        # Build every library value first so a bad entry leaves the image untouched
        staged = [
            (self.image.exifData(), exiv2.ExifKey, _stage_entries(exif, Namespace.EXIF)),
            (self.image.iptcData(), exiv2.IptcKey, _stage_entries(iptc, Namespace.IPTC)),
            (self.image.xmpData(), exiv2.XmpKey, _stage_entries(xmp, Namespace.XMP)),
        ]

        try:
            for data, make_key, values in staged:
                data.clear()
                for key, value in values:
                    if data.add(make_key(key), value):
                        logger.warning(f"exiv2 refused duplicate entry {key} in {self._path}")
            self.image.writeMetadata()
        except exiv2.Exiv2Error as e:
            raise EncodeError(f"Cannot write metadata to {self._path}: {e}") from e

        logger.debug(f"Wrote {len(exif)} EXIF, {len(iptc)} IPTC and {len(xmp)} XMP entries to {self._path}")

    def close(self) -> None:
        self.image = None


class Exiv2Backend(ImageBackend):
    """
    Backend opening images with exiv2.

    Example:
        >>> backend = Exiv2Backend()
        >>> handle = backend.open_image('/photos/DSC05760.JPG')
        >>> raw = handle.read_metadata()
    """

    def __init__(self):
        self._dictionary = Exiv2TagDictionary()

    @property
    def dictionary(self) -> TagDictionary:
        return self._dictionary

    def open_image(self, path: str) -> ImageHandle:
        try:
            image = exiv2.ImageFactory.open(str(path))
        except exiv2.Exiv2Error as e:
            raise OpenError(f"Cannot open image {path}: {e}") from e
        return Exiv2ImageHandle(str(path), image)


def _load_entries(data, namespace: Namespace) -> List[MetadataEntry]:
    return [MetadataEntry(datum.key(), _load_value(datum, namespace)) for datum in data]


def _load_value(datum, namespace: Namespace) -> RawValue:
    tag = TypeTag.from_code(int(datum.typeId()))
    ok = bool(datum.value().ok())

    if namespace != Namespace.XMP and tag in WIRE_TEXT_TAGS:
        # Stored text may be in any encoding, keep the bytes for the decoder
        text = _value_bytes(datum.value())
        if tag == TypeTag.ASCII_STRING:
            text = text.rstrip(b'\0')
        return RawValue(tag, [text], ok)

    if tag == TypeTag.UNDEFINED:
        return RawValue(tag, list(_value_bytes(datum.value())), ok, rendered=_library_text(datum))

    if tag.is_text and tag not in (TypeTag.DATE, TypeTag.TIME):
        return RawValue(tag, [_library_bytes(datum)], ok)

    count = datum.count()
    if count == 0:
        return RawValue(tag, [], ok)

    try:
        if tag in ARRAY_TAGS:
            return RawValue(tag, [_library_bytes(datum, i) for i in range(count)], ok)
        if tag == TypeTag.LANG_ALT:
            return RawValue(tag, split_lang_alt(_library_text(datum)), ok)
        raw = parse_value(tag, _library_text(datum))
    except ValueParseError as e:
        logger.warning(f"Keeping {datum.key()} as an opaque value: {e}")
        return RawValue(tag, [], ok, rendered=_library_text(datum), wire=_copy_bytes(datum.value()))
    raw.ok = ok
    return raw


def _library_bytes(datum, index: Optional[int] = None) -> bytes:
    text = datum.toString() if index is None else datum.toString(index)
    # The binding hands undecodable bytes over as surrogate escapes
    return text.encode('utf-8', 'surrogateescape')


def _library_text(datum) -> str:
    return _library_bytes(datum).decode('utf-8', 'replace')


def _value_bytes(value) -> bytes:
    """Bytes of a text or UNDEFINED value, which have no byte order."""
    data = getattr(value, 'data', None)
    if callable(data):
        return bytes(data())
    return _copy_bytes(value)


def _copy_bytes(value) -> bytes:
    buffer = bytearray(value.size())
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', DeprecationWarning)
        value.copy(buffer, exiv2.ByteOrder.bigEndian)
    return bytes(buffer)


def _read_bytes(value, data: bytes) -> int:
    # String values only take raw bytes through the deprecated overload
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', DeprecationWarning)
        return value.read(data, exiv2.ByteOrder.bigEndian)


def _stage_entries(entries: List[MetadataEntry], namespace: Namespace) -> list:
    return [(entry.key, _make_value(entry, namespace)) for entry in entries]


def _make_value(entry: MetadataEntry, namespace: Namespace):
    raw = entry.value
    # Entries of unknown type are written back as plain strings
    tag = TypeTag.STRING if raw.type_tag == TypeTag.INVALID_TYPE_ID else raw.type_tag
    value = exiv2.Value.create(exiv2.TypeId(tag.value))

    if raw.opaque:
        if _read_bytes(value, raw.wire):
            logger.warning(f"exiv2 did not accept the stored bytes of {entry.key}")
        return value

    try:
        for chunk in _value_chunks(raw, namespace):
            if isinstance(chunk, bytes):
                status = _read_bytes(value, chunk)
            else:
                status = value.read(chunk)
            if status:
                raise EncodeError(f"exiv2 rejected value for {entry.key}: {chunk!r}")
    except exiv2.Exiv2Error as e:
        raise EncodeError(f"exiv2 rejected value for {entry.key}: {e}") from e
    return value


def _value_chunks(raw: RawValue, namespace: Namespace) -> list:
    if raw.type_tag in ARRAY_TAGS or raw.type_tag == TypeTag.LANG_ALT:
        # Array values append one item per read
        return [raw.component_text(i) for i in range(raw.count())]
    if raw.type_tag == TypeTag.UNDEFINED:
        return [bytes(raw.components)]
    if namespace != Namespace.XMP and raw.type_tag in WIRE_TEXT_TAGS:
        text = raw.component_at(0) if raw.components else b''
        if raw.type_tag == TypeTag.ASCII_STRING and not text.endswith(b'\0'):
            text += b'\0'
        return [text]
    return [raw.to_text()]
