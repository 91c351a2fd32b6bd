"""
Type Tag Model

Closed set of value type tags used by EXIF, IPTC and XMP entries. Member
values are the numeric type ids of the exiv2 library, so a backend can map a
library type id straight onto a member.
"""

from enum import Enum
from typing import Optional


class TypeTag(Enum):
    """Enumeration of metadata value types."""
    UNSIGNED_BYTE = 1
    ASCII_STRING = 2
    UNSIGNED_SHORT = 3
    UNSIGNED_LONG = 4
    UNSIGNED_RATIONAL = 5
    SIGNED_BYTE = 6
    UNDEFINED = 7
    SIGNED_SHORT = 8
    SIGNED_LONG = 9
    SIGNED_RATIONAL = 10
    TIFF_FLOAT = 11
    TIFF_DOUBLE = 12
    TIFF_IFD = 13
    UNSIGNED_LONG_LONG = 16
    SIGNED_LONG_LONG = 17
    TIFF_IFD8 = 18
    STRING = 0x10000
    DATE = 0x10001
    TIME = 0x10002
    COMMENT = 0x10003
    DIRECTORY = 0x10004
    XMP_TEXT = 0x10005
    XMP_ALT = 0x10006
    XMP_BAG = 0x10007
    XMP_SEQ = 0x10008
    LANG_ALT = 0x10009
    INVALID_TYPE_ID = 0x1fffe

    @classmethod
    def from_code(cls, code: int) -> 'TypeTag':
        """
        Map a numeric type id onto a tag.

        Args:
            code: Numeric type id reported by the image library

        Returns:
            Matching TypeTag, or INVALID_TYPE_ID for ids outside the closed set
        """
        try:
            return cls(int(code))
        except ValueError:
            return cls.INVALID_TYPE_ID

    @property
    def int_width(self) -> Optional[int]:
        """Bit width for integer tags, None for everything else."""
        return _INT_WIDTHS.get(self)

    @property
    def is_signed_int(self) -> bool:
        return self in SIGNED_INT_TAGS

    @property
    def is_text(self) -> bool:
        """True for tags whose single component is a byte string."""
        return self in TEXT_TAGS


UNSIGNED_INT_TAGS = frozenset([
    TypeTag.UNSIGNED_BYTE,
    TypeTag.UNSIGNED_SHORT,
    TypeTag.UNSIGNED_LONG,
    TypeTag.UNSIGNED_LONG_LONG,
    TypeTag.TIFF_IFD,
    TypeTag.TIFF_IFD8,
])

SIGNED_INT_TAGS = frozenset([
    TypeTag.SIGNED_BYTE,
    TypeTag.SIGNED_SHORT,
    TypeTag.SIGNED_LONG,
    TypeTag.SIGNED_LONG_LONG,
])

FLOAT_TAGS = frozenset([TypeTag.TIFF_FLOAT, TypeTag.TIFF_DOUBLE])

RATIONAL_TAGS = frozenset([TypeTag.UNSIGNED_RATIONAL, TypeTag.SIGNED_RATIONAL])

# Array-valued XMP tags: one byte string per item
ARRAY_TAGS = frozenset([TypeTag.XMP_ALT, TypeTag.XMP_BAG, TypeTag.XMP_SEQ])

TEXT_TAGS = frozenset([
    TypeTag.ASCII_STRING,
    TypeTag.STRING,
    TypeTag.DATE,
    TypeTag.TIME,
    TypeTag.COMMENT,
    TypeTag.DIRECTORY,
    TypeTag.XMP_TEXT,
    TypeTag.INVALID_TYPE_ID,
])

_INT_WIDTHS = {
    TypeTag.UNSIGNED_BYTE: 8,
    TypeTag.SIGNED_BYTE: 8,
    TypeTag.UNSIGNED_SHORT: 16,
    TypeTag.SIGNED_SHORT: 16,
    TypeTag.UNSIGNED_LONG: 32,
    TypeTag.SIGNED_LONG: 32,
    TypeTag.TIFF_IFD: 32,
    TypeTag.UNSIGNED_LONG_LONG: 64,
    TypeTag.SIGNED_LONG_LONG: 64,
    TypeTag.TIFF_IFD8: 64,
}
