"""
Metadata Entry Model

Represents one typed record inside an EXIF, IPTC or XMP container.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from .type_tag import TypeTag, RATIONAL_TAGS, ARRAY_TAGS


class Namespace(Enum):
    """Enumeration of metadata namespaces, valued by their key prefix."""
    EXIF = "Exif"
    IPTC = "Iptc"
    XMP = "Xmp"


@dataclass
class RawValue:
    """
    Typed value of a metadata entry as stored by the image library.

    Components are typed per tag: ints for integer tags and UNDEFINED bytes,
    floats for float tags, ``(numerator, denominator)`` pairs for rationals,
    ``bytes`` for string-bearing tags and XMP array items, and
    ``(language, bytes)`` pairs for language alternatives.

    Values read from a file may also carry the library's own rendering of
    the whole value, and values whose components could not be modelled keep
    the library's bytes instead (an opaque value).

    Attributes:
        type_tag: Type of the value
        components: Indexable components of the value
        ok: False when the library flagged the value as malformed
        rendered: Library text of the whole value, if it differs from the
            component grammar (e.g. ``charset=Ascii hello`` for a comment)
        wire: Big-endian library bytes of an opaque value
    """

    type_tag: TypeTag
    components: List[Any] = field(default_factory=list)
    ok: bool = True
    rendered: Optional[str] = None
    wire: Optional[bytes] = None

    @property
    def opaque(self) -> bool:
        return self.wire is not None and not self.components

    def count(self) -> int:
        """
        Number of indexable components.

        Single-string values report their byte length, so an empty string
        counts as zero components.
        """
        if self.opaque:
            return len(self.wire)
        if self.type_tag.is_text:
            return len(self.components[0]) if self.components else 0
        return len(self.components)

    def component_at(self, index: int) -> Any:
        return self.components[index]

    def component_text(self, index: int, encoding: str = 'utf-8',
                       errors: str = 'replace') -> str:
        """Render one component in the library's textual grammar."""
        return _render_component(self.type_tag, self.components[index], encoding, errors)

    def to_text(self, encoding: str = 'utf-8', errors: str = 'replace') -> str:
        """
        Render the whole value in the library's textual grammar.

        Returns:
            Space separated numbers and ``num/den`` rationals, comma
            separated XMP items and ``lang="xx" text`` alternatives, or the
            string itself for text tags
        """
        if self.rendered is not None:
            return self.rendered
        parts = [
            _render_component(self.type_tag, component, encoding, errors)
            for component in self.components
        ]
        if self.type_tag in ARRAY_TAGS or self.type_tag == TypeTag.LANG_ALT:
            return ', '.join(parts)
        return ' '.join(parts)

    def copy(self) -> 'RawValue':
        # Components are immutable, a new list is enough to detach the copy
        return RawValue(self.type_tag, list(self.components), self.ok, self.rendered, self.wire)


@dataclass
class MetadataEntry:
    """
    One record in a namespace container.

    Attributes:
        key: Namespace qualified key (e.g. ``Exif.Image.Make``)
        value: Typed raw value

    Example:
        >>> entry = MetadataEntry(
        ...     key="Exif.Image.Orientation",
        ...     value=RawValue(TypeTag.UNSIGNED_SHORT, [1])
        ... )
        >>> entry.repeat_count
        1
    """

    key: str
    value: RawValue

    @property
    def type_tag(self) -> TypeTag:
        return self.value.type_tag

    @property
    def repeat_count(self) -> int:
        return self.value.count()

    @property
    def valid(self) -> bool:
        return self.value.ok

    def copy(self) -> 'MetadataEntry':
        return MetadataEntry(self.key, self.value.copy())


def _render_component(type_tag: TypeTag, component: Any, encoding: str, errors: str) -> str:
    if type_tag in RATIONAL_TAGS:
        numerator, denominator = component
        return f"{numerator}/{denominator}"
    if type_tag == TypeTag.LANG_ALT:
        language, text = component
        return f'lang="{language}" {text.decode(encoding, errors)}'
    if isinstance(component, bytes):
        return component.decode(encoding, errors)
    return str(component)
