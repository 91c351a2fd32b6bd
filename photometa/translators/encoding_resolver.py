"""
Encoding Resolver

Works out which text encoding an IPTC container uses from the ISO 2022
escape sequence stored in ``Iptc.Envelope.CharacterSet``.
"""

import logging
from typing import Iterable

from ..models import EncodingTag, IPTC_DEFAULT_ENCODING, MetadataEntry

logger = logging.getLogger(__name__)

CHARACTER_SET_KEY = "Iptc.Envelope.CharacterSet"

ESCAPE_SEQUENCES = {
    b"\x1b%G": EncodingTag.UTF_8,
    b"\x1b%/I": EncodingTag.UTF_8,
    b"\x1b%/L": EncodingTag.UTF_16,
    b"\x1b%/F": EncodingTag.UTF_32,
    b"\x1b(B": EncodingTag.US_ASCII,
    b"\x1b.A": EncodingTag.ISO_8859_1,
    b"\x1b.B": EncodingTag.ISO_8859_2,
    b"\x1b.C": EncodingTag.ISO_8859_3,
    b"\x1b.D": EncodingTag.ISO_8859_4,
    b"\x1b.F": EncodingTag.ISO_8859_7,
    b"\x1b.G": EncodingTag.ISO_8859_6,
    b"\x1b.H": EncodingTag.ISO_8859_8,
    b"\x1b/b": EncodingTag.ISO_8859_15,
}


def resolve_encoding(entries: Iterable[MetadataEntry]) -> EncodingTag:
    """
    Resolve the text encoding declared by an IPTC container.

    Only the first ``Iptc.Envelope.CharacterSet`` entry is considered. A
    missing or invalid entry, or an escape sequence outside the known table,
    yields ISO-8859-1 (the IPTC legacy default).

    Args:
        entries: IPTC entries in container order

    Returns:
        Encoding to apply to every string value of the container

    Example:
        >>> entry = MetadataEntry(CHARACTER_SET_KEY, RawValue(TypeTag.STRING, [b"\\x1b%G"]))
        >>> resolve_encoding([entry])
        <EncodingTag.UTF_8: 'utf-8'>
    """
    for entry in entries:
        if entry.key != CHARACTER_SET_KEY:
            continue

        if not entry.valid or not entry.value.components:
            return IPTC_DEFAULT_ENCODING

        sequence = _as_bytes(entry.value.component_at(0))
        encoding = ESCAPE_SEQUENCES.get(sequence)
        if encoding is None:
            logger.debug(f"Unrecognized IPTC character set {sequence!r}, using {IPTC_DEFAULT_ENCODING.value}")
            return IPTC_DEFAULT_ENCODING
        return encoding

    return IPTC_DEFAULT_ENCODING


def _as_bytes(component) -> bytes:
    if isinstance(component, bytes):
        return component
    return str(component).encode('latin-1', 'replace')
