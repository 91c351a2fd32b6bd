"""
Namespace Container

Ordered, key addressable store of the entries of one namespace. Keys need
not be unique: repeatable IPTC datasets appear once per value.
"""

from typing import Iterable, Iterator, List, Optional

from ..models import MetadataEntry, Namespace


class NamespaceContainer:
    """
    Entries of one namespace in insertion order.

    Attributes:
        namespace: Namespace of every entry in the container

    Example:
        >>> container = NamespaceContainer(Namespace.IPTC)
        >>> container.add(entry)
        >>> container.delete_first("Iptc.Application2.Keywords")
        True
    """

    def __init__(self, namespace: Namespace, entries: Optional[Iterable[MetadataEntry]] = None):
        self.namespace = namespace
        self._entries: List[MetadataEntry] = list(entries or [])

    def __iter__(self) -> Iterator[MetadataEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> List[MetadataEntry]:
        """Snapshot of the current entries."""
        return list(self._entries)

    def add(self, entry: MetadataEntry) -> None:
        self._entries.append(entry)

    def find_key(self, key: str) -> Optional[int]:
        """Index of the first entry with ``key``, or None."""
        for index, entry in enumerate(self._entries):
            if entry.key == key:
                return index
        return None

    def assign(self, entry: MetadataEntry) -> None:
        """Replace the first entry with the same key, or append."""
        index = self.find_key(entry.key)
        if index is None:
            self._entries.append(entry)
        else:
            self._entries[index] = entry

    def delete_first(self, key: str) -> bool:
        """
        Remove the first entry with ``key``.

        Returns:
            True if an entry was removed, False if none matched
        """
        index = self.find_key(key)
        if index is None:
            return False
        del self._entries[index]
        return True

    def clear(self) -> None:
        self._entries.clear()

    def replace(self, entries: Iterable[MetadataEntry]) -> None:
        """Swap in a new set of entries, keeping this container object."""
        self._entries[:] = list(entries)

    def copy(self) -> 'NamespaceContainer':
        """Deep copy; later changes to either side do not affect the other."""
        return NamespaceContainer(self.namespace, [entry.copy() for entry in self._entries])
