"""
Suggestion computation for the tag input.

Ranking is substring containment in registry order, nothing more: no
relevance scoring and no fuzzy matching.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from .tags import clean_tag, tag_key


@dataclass(frozen=True)
class Existing:
    """A registry entry that is not yet selected."""

    tag: str

    @property
    def label(self) -> str:
        return self.tag


@dataclass(frozen=True)
class CreateNew:
    """Create `text` as a new registry entry and select it."""

    text: str

    @property
    def label(self) -> str:
        return f'Create "{self.text}"'


Suggestion = Union[Existing, CreateNew]


def suggest(raw_input: str, selection: Iterable[str], registry: Iterable[str]) -> Tuple[Suggestion, ...]:
    """
    Compute the suggestion list for the current input.

    Args:
        raw_input: Text currently in the input box
        selection: Tags already attached to the entity
        registry: Known tags, in registry order

    Returns:
        Tuple of suggestions. A CreateNew entry, when present, comes first;
        the rest are Existing entries in registry order. Empty for blank input.
    """
    text = clean_tag(raw_input)
    if not text:
        return ()

    needle = tag_key(text)
    selected = {tag_key(t) for t in selection}
    entries = list(registry)

    filtered: List[Suggestion] = [
        Existing(entry)
        for entry in entries
        if tag_key(entry) not in selected and needle in tag_key(entry)
    ]
    exact_match = any(tag_key(entry) == needle for entry in entries)

    if not exact_match:
        filtered.insert(0, CreateNew(text))
    return tuple(filtered)
