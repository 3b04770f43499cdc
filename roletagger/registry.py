"""
Shared vocabulary of known tag names.

One TagRegistry instance is shared by every controller opened during a
session. Entries keep the casing they were entered with; uniqueness is by
case-insensitive identity (see tags.tag_key).
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import InvalidTagError
from .tags import clean_tag, find_tag, is_valid_tag, tag_key


class TagRegistry:
    """Ordered, case-insensitively unique list of tag names."""

    def __init__(self, tags: Iterable[str] = ()):
        self._tags: List[str] = []
        self._keys = set()
        for tag in tags:
            # Persisted data may be hand-edited; drop blanks and duplicates
            if not is_valid_tag(tag):
                continue
            self._append(clean_tag(tag))

    def _append(self, tag: str) -> bool:
        key = tag_key(tag)
        if key in self._keys:
            return False
        self._tags.append(tag)
        self._keys.add(key)
        return True

    def find(self, tag: str) -> Optional[str]:
        if tag_key(tag) not in self._keys:
            return None
        return find_tag(self._tags, tag)

    def add(self, tag: str) -> str:
        """
        Add a tag unless an entry with the same identity exists.

        Args:
            tag: Raw tag text (trimmed before storing)

        Returns:
            The registry entry for the tag: the new one, or the existing
            entry it folded into.

        Raises:
            InvalidTagError: If the tag is empty after trimming
        """
        if not is_valid_tag(tag):
            raise InvalidTagError(f"Tag must be a non-empty string, got {tag!r}")
        cleaned = clean_tag(tag)
        existing = self.find(cleaned)
        if existing is not None:
            return existing
        self._append(cleaned)
        return cleaned

    def remove(self, tag: str) -> bool:
        existing = self.find(tag)
        if existing is None:
            return False
        self._tags.remove(existing)
        self._keys.discard(tag_key(existing))
        return True

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self._tags)

    def to_list(self) -> List[str]:
        return list(self._tags)

    def __contains__(self, tag) -> bool:
        return isinstance(tag, str) and tag_key(tag) in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tags))

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"TagRegistry({self._tags!r})"
