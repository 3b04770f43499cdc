"""
Tags attached to one entity.

SelectionState is an immutable value: add/remove return a new state so the
navigation reducer can stay side-effect free.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from .tags import clean_tag, contains_tag, find_tag, is_valid_tag, tag_key


@dataclass(frozen=True)
class SelectionState:
    """Ordered, case-insensitively unique tags in insertion order."""

    tags: Tuple[str, ...] = ()

    @classmethod
    def from_iterable(cls, tags: Iterable[str]) -> "SelectionState":
        kept: List[str] = []
        seen = set()
        for tag in tags:
            if not is_valid_tag(tag):
                continue
            key = tag_key(tag)
            if key in seen:
                continue
            seen.add(key)
            kept.append(clean_tag(tag))
        return cls(tuple(kept))

    def add(self, tag: str) -> "SelectionState":
        if contains_tag(self.tags, tag):
            return self
        return SelectionState(self.tags + (tag,))

    def remove(self, tag: str) -> "SelectionState":
        existing = find_tag(self.tags, tag)
        if existing is None:
            return self
        return SelectionState(tuple(t for t in self.tags if t != existing))

    def to_list(self) -> List[str]:
        return list(self.tags)

    def __contains__(self, tag) -> bool:
        return isinstance(tag, str) and contains_tag(self.tags, tag)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self.tags)
