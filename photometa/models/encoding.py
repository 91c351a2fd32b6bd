"""
Encoding Model

Text encodings an IPTC container can declare. Member values are Python codec
names, so ``data.decode(tag.value)`` works directly.
"""

from enum import Enum


class EncodingTag(Enum):
    """Enumeration of supported text encodings."""
    UTF_8 = "utf-8"
    UTF_16 = "utf-16"
    UTF_32 = "utf-32"
    US_ASCII = "ascii"
    ISO_8859_1 = "iso-8859-1"
    ISO_8859_2 = "iso-8859-2"
    ISO_8859_3 = "iso-8859-3"
    ISO_8859_4 = "iso-8859-4"
    ISO_8859_6 = "iso-8859-6"
    ISO_8859_7 = "iso-8859-7"
    ISO_8859_8 = "iso-8859-8"
    ISO_8859_15 = "iso-8859-15"


# Legacy IPTC default when no character set is declared
IPTC_DEFAULT_ENCODING = EncodingTag.ISO_8859_1
