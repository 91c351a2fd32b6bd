"""
IPTC character set resolution tests.
"""

import pytest

from conftest import entry
from photometa.models import EncodingTag, TypeTag
from photometa.translators import CHARACTER_SET_KEY, resolve_encoding
from photometa.translators.encoding_resolver import ESCAPE_SEQUENCES


def charset(sequence: bytes, ok: bool = True):
    return entry(CHARACTER_SET_KEY, TypeTag.STRING, [sequence], ok)


def test_utf8_escape_sequence():
    assert resolve_encoding([charset(b"\x1b%G")]) == EncodingTag.UTF_8


def test_missing_character_set_defaults_to_latin1():
    keywords = entry("Iptc.Application2.Keywords", TypeTag.STRING, [b"sunset"])
    assert resolve_encoding([keywords]) == EncodingTag.ISO_8859_1
    assert resolve_encoding([]) == EncodingTag.ISO_8859_1


def test_invalid_character_set_defaults_to_latin1():
    assert resolve_encoding([charset(b"\x1b%G", ok=False)]) == EncodingTag.ISO_8859_1


def test_unrecognized_sequence_defaults_to_latin1():
    assert resolve_encoding([charset(b"\x1b$B")]) == EncodingTag.ISO_8859_1


def test_first_character_set_entry_wins():
    entries = [charset(b"\x1b.B"), charset(b"\x1b%G")]
    assert resolve_encoding(entries) == EncodingTag.ISO_8859_2


@pytest.mark.parametrize("sequence,expected", [
    (b"\x1b%/I", EncodingTag.UTF_8),
    (b"\x1b%/L", EncodingTag.UTF_16),
    (b"\x1b%/F", EncodingTag.UTF_32),
    (b"\x1b(B", EncodingTag.US_ASCII),
    (b"\x1b.A", EncodingTag.ISO_8859_1),
    (b"\x1b.C", EncodingTag.ISO_8859_3),
    (b"\x1b.D", EncodingTag.ISO_8859_4),
    (b"\x1b.F", EncodingTag.ISO_8859_7),
    (b"\x1b.G", EncodingTag.ISO_8859_6),
    (b"\x1b.H", EncodingTag.ISO_8859_8),
    (b"\x1b/b", EncodingTag.ISO_8859_15),
])
def test_escape_sequence_table(sequence, expected):
    assert ESCAPE_SEQUENCES[sequence] == expected
    assert resolve_encoding([charset(sequence)]) == expected
