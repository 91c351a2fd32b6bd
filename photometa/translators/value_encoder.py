"""
Value Encoder

Builds correctly typed metadata entries from caller supplied values. The
caller's value is turned into text first and then parsed with the same
grammar the library uses when it renders values (``num/den`` rationals,
space separated numbers, ``lang="xx" text`` alternatives).
"""

import logging
import re
from typing import Any, Callable, Dict, List, Tuple, Union, TYPE_CHECKING

from ..errors import ValueParseError
from ..models import EncodingTag, MetadataEntry, Namespace, RawValue, TypeTag
from ..models.type_tag import (
    ARRAY_TAGS, FLOAT_TAGS, RATIONAL_TAGS, SIGNED_INT_TAGS, UNSIGNED_INT_TAGS
)
from .host_values import format_date, format_time, parse_date, parse_time

if TYPE_CHECKING:
    from ..storage.image_backend import TagDictionary

logger = logging.getLogger(__name__)

Text = Union[str, bytes]

LANG_ITEM = re.compile(r'^lang="?([^"\s]+)"?\s(.*)$', re.DOTALL)
LANG_SEPARATOR = re.compile(r',\s*lang=')

# Rational components are 32-bit on the wire
RATIONAL_WIDTH = 32


def _as_str(text: Text, codec: str) -> str:
    return text.decode(codec) if isinstance(text, bytes) else text


def _as_bytes(text: Text, codec: str) -> bytes:
    if isinstance(text, bytes):
        return text
    try:
        return text.encode(codec)
    except UnicodeEncodeError as e:
        raise ValueParseError(f"Text cannot be encoded as {codec}: {text!r}") from e


def _tokens(tag: TypeTag, text: Text, codec: str) -> List[str]:
    tokens = _as_str(text, codec).split()
    if not tokens:
        raise ValueParseError(f"Empty value for {tag.name}")
    return tokens


def _bounds(width: int, signed: bool) -> Tuple[int, int]:
    if signed:
        return -(1 << (width - 1)), (1 << (width - 1)) - 1
    return 0, (1 << width) - 1


def _parse_int(token: str, tag: TypeTag, low: int, high: int) -> int:
    try:
        number = int(token, 10)
    except ValueError as e:
        raise ValueParseError(f"Not an integer for {tag.name}: {token!r}") from e
    if not low <= number <= high:
        raise ValueParseError(f"{number} out of range for {tag.name} [{low}, {high}]")
    return number


def _parse_integers(tag: TypeTag, text: Text, codec: str) -> List[int]:
    low, high = _bounds(tag.int_width, tag.is_signed_int)
    return [_parse_int(token, tag, low, high) for token in _tokens(tag, text, codec)]


def _parse_floats(tag: TypeTag, text: Text, codec: str) -> List[float]:
    numbers = []
    for token in _tokens(tag, text, codec):
        try:
            numbers.append(float(token))
        except ValueError as e:
            raise ValueParseError(f"Not a number for {tag.name}: {token!r}") from e
    return numbers


def _parse_rationals(tag: TypeTag, text: Text, codec: str) -> List[Tuple[int, int]]:
    """Parse ``num/den`` tokens; a bare integer ``n`` reads as ``n/1``."""
    low, high = _bounds(RATIONAL_WIDTH, tag == TypeTag.SIGNED_RATIONAL)
    pairs = []
    for token in _tokens(tag, text, codec):
        numerator, _, denominator = token.partition('/')
        pairs.append((
            _parse_int(numerator, tag, low, high),
            _parse_int(denominator, tag, low, high) if denominator else 1,
        ))
    return pairs


def _parse_date(tag: TypeTag, text: Text, codec: str) -> List[bytes]:
    return [format_date(parse_date(_as_str(text, codec))).encode('ascii')]


def _parse_time(tag: TypeTag, text: Text, codec: str) -> List[bytes]:
    return [format_time(parse_time(_as_str(text, codec))).encode('ascii')]


def _parse_text(tag: TypeTag, text: Text, codec: str) -> List[bytes]:
    return [_as_bytes(text, codec)]


def _parse_undefined(tag: TypeTag, text: Text, codec: str) -> List[int]:
    """Read space separated decimal byte values (``"48 50 50 49"``)."""
    return [_parse_int(token, tag, 0, 255) for token in _tokens(tag, text, codec)]


def _parse_lang_alt(tag: TypeTag, text: Text, codec: str) -> List[Tuple[str, bytes]]:
    """
    Read one language alternative.

    Plain text is stored under ``x-default``; ``lang="de" Hallo`` under the
    named language. Several alternatives in one value are rejected.
    """
    text = _as_str(text, codec)
    match = LANG_ITEM.match(text)
    if not match:
        return [('x-default', _as_bytes(text, codec))]
    if LANG_SEPARATOR.search(text):
        raise ValueParseError("Writing several language alternatives at once is not supported")
    language, body = match.groups()
    return [(language, _as_bytes(body, codec))]


PARSERS: Dict[TypeTag, Callable[[TypeTag, Text, str], List[Any]]] = {}
PARSERS.update((tag, _parse_integers) for tag in UNSIGNED_INT_TAGS | SIGNED_INT_TAGS)
PARSERS.update((tag, _parse_floats) for tag in FLOAT_TAGS)
PARSERS.update((tag, _parse_rationals) for tag in RATIONAL_TAGS)
PARSERS.update((tag, _parse_text) for tag in ARRAY_TAGS)
PARSERS.update({
    TypeTag.ASCII_STRING: _parse_text,
    TypeTag.STRING: _parse_text,
    TypeTag.COMMENT: _parse_text,
    TypeTag.DIRECTORY: _parse_text,
    TypeTag.XMP_TEXT: _parse_text,
    TypeTag.INVALID_TYPE_ID: _parse_text,
    TypeTag.DATE: _parse_date,
    TypeTag.TIME: _parse_time,
    TypeTag.UNDEFINED: _parse_undefined,
    TypeTag.LANG_ALT: _parse_lang_alt,
})


def parse_value(tag: TypeTag, text: Text,
                encoding: EncodingTag = EncodingTag.UTF_8) -> RawValue:
    """
    Parse text into a raw value of the given type.

    Args:
        tag: Target type
        text: Textual form of the value; bytes are taken verbatim for text tags
        encoding: Encoding used to store string components

    Returns:
        RawValue holding the parsed components

    Raises:
        ValueParseError: If the text does not fit the type

    Example:
        >>> parse_value(TypeTag.UNSIGNED_RATIONAL, "3/4").components
        [(3, 4)]
    """
    try:
        components = PARSERS[tag](tag, text, encoding.value)
    except UnicodeDecodeError as e:
        raise ValueParseError(f"Undecodable text for {tag.name}: {e}") from e
    return RawValue(tag, components)


def host_text(value: Any) -> Text:
    """Textual form of a caller value; bytes pass through untouched."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return str(value)


def encode(namespace: Namespace, key: str, value: Any, dictionary: 'TagDictionary',
           encoding: EncodingTag = EncodingTag.UTF_8) -> MetadataEntry:
    """
    Build a typed entry for ``key`` from a caller value.

    EXIF keys take the default type of their tag and IFD, IPTC keys the type
    of their dataset. XMP values are always stored as text.

    Args:
        namespace: Namespace the key belongs to
        key: Fully qualified key
        value: Caller value, converted with ``str()``
        dictionary: Tag dictionary used to resolve the type
        encoding: Encoding for string components

    Returns:
        New MetadataEntry

    Raises:
        KeyResolutionError: If the dictionary does not know the key
        ValueParseError: If the text does not fit the resolved type
    """
    if namespace == Namespace.EXIF:
        tag = dictionary.exif_default_type(key)
    elif namespace == Namespace.IPTC:
        tag = dictionary.iptc_dataset_type(key)
    else:
        key = dictionary.xmp_key(key)
        tag = TypeTag.XMP_TEXT

    raw = parse_value(tag, host_text(value), encoding)
    logger.debug(f"Encoded {key} as {tag.name} with {raw.count()} component(s)")
    return MetadataEntry(key, raw)


def split_lang_alt(text: str, encoding: EncodingTag = EncodingTag.UTF_8) -> List[Tuple[str, bytes]]:
    """
    Split a rendered language alternative into ``(language, text)`` pairs.

    Example:
        >>> split_lang_alt('lang="x-default" Hello, lang="de" Hallo')
        [('x-default', b'Hello'), ('de', b'Hallo')]
    """
    pairs = []
    for item in re.split(r',\s*(?=lang=)', text):
        match = LANG_ITEM.match(item)
        if match:
            language, body = match.groups()
        else:
            language, body = 'x-default', item
        pairs.append((language, _as_bytes(body, encoding.value)))
    return pairs
