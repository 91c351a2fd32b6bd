"""
Metadata Data

Caller facing views over the EXIF, IPTC and XMP containers of an image
session. A view keeps its session alive and reads the session's live
container on every call, so mutations through a view change the session
and iteration sees the state at the time it starts.
"""

import logging
from typing import Any, Dict, Iterator, Tuple, TYPE_CHECKING

from ..errors import KeyResolutionError, ValueParseError
from ..models import EncodingTag, Namespace
from ..translators import decode, encode, resolve_encoding
from .namespace_container import NamespaceContainer

if TYPE_CHECKING:
    from ..image_session import ImageSession

logger = logging.getLogger(__name__)


class MetadataData:
    """
    Shared iterate/add/delete/clear behaviour of the three namespace views.

    Subclasses set ``namespace`` and may override ``_encoding`` and ``add``.
    """

    namespace: Namespace

    def __init__(self, image: 'ImageSession'):
        # Strong reference: the session outlives every view handed out
        self.image = image

    @property
    def _container(self) -> NamespaceContainer:
        return self.image.container(self.namespace)

    def _encoding(self) -> EncodingTag:
        return EncodingTag.UTF_8

    def each(self) -> Iterator[Tuple[str, Any]]:
        """
        Iterate ``(key, value)`` pairs in insertion order.

        Entries without components are skipped. An entry whose date, time or
        rational cannot be built, or whose text does not decode under a strict
        error policy, yields its raw text instead.
        """
        return self._decode_entries(
            self._container.entries(), self._encoding(), self.image.decode_errors
        )

    def _decode_entries(self, entries, encoding: EncodingTag,
                        errors: str) -> Iterator[Tuple[str, Any]]:
        for entry in entries:
            try:
                value = decode(entry, encoding, errors)
            except (ValueParseError, UnicodeDecodeError) as e:
                logger.warning(f"Returning raw text for {entry.key}: {e}")
                value = entry.value.to_text(encoding.value, 'replace')
            if value is None:
                continue
            yield entry.key, value

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return self.each()

    def __len__(self) -> int:
        return len(self._container)

    def add(self, key: str, value: Any) -> bool:
        """
        Encode ``value`` for ``key`` and append it.

        Returns:
            True once the entry is stored

        Raises:
            KeyResolutionError: If the key is unknown
            ValueParseError: If the value does not fit the key's type
        """
        entry = encode(self.namespace, key, value, self.image.dictionary, self._encoding())
        self._container.add(entry)
        logger.debug(f"Added {key}")
        return True

    def delete(self, key: str) -> bool:
        """
        Remove the first entry with ``key``.

        Returns:
            True if an entry was removed, False if none matched
        """
        return self._container.delete_first(key)

    def clear(self) -> None:
        self._container.clear()

    def to_dict(self) -> Dict[str, Any]:
        """
        Collect the values into a dictionary.

        Repeated keys map to a list of their values in insertion order.
        """
        result: Dict[str, Any] = {}
        repeated = set()
        for key, value in self.each():
            if key not in result:
                result[key] = value
            elif key in repeated:
                result[key].append(value)
            else:
                result[key] = [result[key], value]
                repeated.add(key)
        return result

    def __repr__(self) -> str:
        items = ', '.join(f"{key!r}: {value!r}" for key, value in sorted(self.to_dict().items()))
        return f"<{type(self).__name__}: {{{items}}}>"


class ExifData(MetadataData):
    """EXIF view. Unknown keys passed to ``add`` raise KeyResolutionError."""

    namespace = Namespace.EXIF


class IptcData(MetadataData):
    """
    IPTC view.

    Strings are decoded with the encoding declared by
    ``Iptc.Envelope.CharacterSet``, resolved once per traversal.
    """

    namespace = Namespace.IPTC

    def _encoding(self) -> EncodingTag:
        return resolve_encoding(self._container)

    def add(self, key: str, value: Any) -> bool:
        """
        Encode ``value`` for ``key`` and append it.

        Returns:
            False, without inserting, when the dataset is unknown or is not
            repeatable and already present; True otherwise

        Raises:
            ValueParseError: If the value does not fit the dataset's type
        """
        try:
            repeatable = self.image.dictionary.iptc_dataset_repeatable(key)
        except KeyResolutionError as e:
            logger.warning(f"Not adding IPTC entry: {e}")
            return False

        if not repeatable and self._container.find_key(key) is not None:
            logger.warning(f"Not adding IPTC entry: {key} is not repeatable and already set")
            return False

        return super().add(key, value)


class XmpData(MetadataData):
    """
    XMP view.

    XMP is text native: ``add`` stores the value's text and replaces an
    existing entry with the same key instead of appending.
    """

    namespace = Namespace.XMP

    def add(self, key: str, value: Any) -> bool:
        entry = encode(self.namespace, key, value, self.image.dictionary)
        self._container.assign(entry)
        logger.debug(f"Set {entry.key}")
        return True
