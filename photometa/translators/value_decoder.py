"""
Value Decoder

Turns a typed metadata entry into the Python value handed to callers.
Dispatch is purely on the entry's type tag.
"""

from typing import Any, Callable, Dict, Optional

from ..models import EncodingTag, MetadataEntry, RawValue, TypeTag
from ..models.type_tag import (
    FLOAT_TAGS, RATIONAL_TAGS, SIGNED_INT_TAGS, UNSIGNED_INT_TAGS
)
from .host_values import parse_date, parse_time, to_fraction

LANG_DEFAULT = 'x-default'


def _decode_integer(value: RawValue, codec: str, errors: str) -> int:
    # Python ints hold the full unsigned 64-bit range
    return int(value.component_at(0))


def _decode_float(value: RawValue, codec: str, errors: str) -> float:
    return float(value.component_at(0))


def _decode_date(value: RawValue, codec: str, errors: str):
    return parse_date(value.to_text('ascii', 'replace'))


def _decode_time(value: RawValue, codec: str, errors: str):
    return parse_time(value.to_text('ascii', 'replace'))


def _decode_rational(value: RawValue, codec: str, errors: str):
    return to_fraction(value.component_at(0))


def _decode_lang_alt(value: RawValue, codec: str, errors: str):
    """Collapse a lone x-default alternative to its text, else build a map."""
    if value.count() == 1:
        language, text = value.component_at(0)
        if language == LANG_DEFAULT:
            return text.decode(codec, errors)

    return {
        language: text.decode(codec, errors)
        for language, text in value.components
    }


def _decode_list(value: RawValue, codec: str, errors: str):
    return [value.component_text(i, codec, errors) for i in range(value.count())]


def _decode_whole(value: RawValue, codec: str, errors: str) -> str:
    return value.to_text(codec, errors)


def _decode_first(value: RawValue, codec: str, errors: str) -> str:
    return value.component_text(0, codec, errors)


_DECODERS: Dict[TypeTag, Callable[[RawValue, str, str], Any]] = {}
_DECODERS.update((tag, _decode_integer) for tag in UNSIGNED_INT_TAGS | SIGNED_INT_TAGS)
_DECODERS.update((tag, _decode_float) for tag in FLOAT_TAGS)
_DECODERS.update((tag, _decode_rational) for tag in RATIONAL_TAGS)
_DECODERS.update({
    TypeTag.DATE: _decode_date,
    TypeTag.TIME: _decode_time,
    TypeTag.LANG_ALT: _decode_lang_alt,
    TypeTag.XMP_BAG: _decode_list,
    TypeTag.XMP_SEQ: _decode_list,
    TypeTag.UNDEFINED: _decode_whole,
})


def decode(entry: MetadataEntry, encoding: EncodingTag = EncodingTag.UTF_8,
           errors: str = 'replace') -> Optional[Any]:
    """
    Decode one entry into a Python value.

    Integers become ``int``, floats ``float``, rationals ``Fraction``, dates
    and times ``datetime.date`` / ``datetime.time``, language alternatives a
    ``dict`` (or a plain ``str`` for a lone ``x-default``), XMP bags and
    sequences a ``list`` of ``str``. UNDEFINED blobs and opaque values decode
    to their whole textual form and every other tag to the text of its first
    component.

    Args:
        entry: Entry to decode
        encoding: Encoding applied to every string in the value
        errors: ``bytes.decode`` error policy for undecodable text

    Returns:
        Decoded value, or None when the entry has no components

    Raises:
        ValueParseError: If date, time or rational construction fails
    """
    value = entry.value
    if value.count() == 0:
        return None

    if value.opaque:
        return value.to_text(encoding.value, errors)

    decoder = _DECODERS.get(value.type_tag, _decode_first)
    return decoder(value, encoding.value, errors)
