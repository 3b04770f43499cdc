from typing import Iterable, Optional


def clean_tag(raw: str) -> str:
    return raw.strip()


def tag_key(tag: str) -> str:
    """Identity of a tag. Two tags are the same when their keys match."""
    return tag.lower()


def is_valid_tag(raw) -> bool:
    return isinstance(raw, str) and clean_tag(raw) != ""


def find_tag(tags: Iterable[str], candidate: str) -> Optional[str]:
    """Return the entry of `tags` with the same identity as `candidate`, keeping its stored casing."""
    key = tag_key(candidate)
    for tag in tags:
        if tag_key(tag) == key:
            return tag
    return None


def contains_tag(tags: Iterable[str], candidate: str) -> bool:
    return find_tag(tags, candidate) is not None
