"""
Translators between typed metadata entries and Python values.
"""

from .encoding_resolver import resolve_encoding, CHARACTER_SET_KEY
from .value_decoder import decode
from .value_encoder import encode, parse_value

__all__ = [
    'resolve_encoding',
    'CHARACTER_SET_KEY',
    'decode',
    'encode',
    'parse_value',
]
