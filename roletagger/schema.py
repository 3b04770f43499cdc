from typing import Any, List

from .tags import is_valid_tag, tag_key

NOTES_TEXT_FIELDS = ["salaryRange", "potentialContracts", "generalNotes"]
NOTES_ROLES_FIELD = "potentialRoles"


def validate_registry(data: Any) -> List[str]:
    """
    Returns a list of problems with a persisted registry. Empty list means valid.
    Only a non-list value makes the registry unusable; item problems are
    repaired on load by dropping the offending entries.
    """
    if not isinstance(data, list):
        return [f"Registry must be a list, got {type(data).__name__}"]

    errors: List[str] = []
    seen = set()
    for i, item in enumerate(data):
        if not is_valid_tag(item):
            errors.append(f"Entry {i} must be a non-empty string")
            continue
        key = tag_key(item.strip())
        if key in seen:
            errors.append(f"Entry {i} duplicates an earlier role: {item!r}")
        seen.add(key)
    return errors


def registry_is_usable(data: Any) -> bool:
    return isinstance(data, list)


def validate_notes(data: Any) -> List[str]:
    """Returns a list of problems with a persisted notes record. Empty list means valid."""
    if not isinstance(data, dict):
        return [f"Notes must be an object, got {type(data).__name__}"]

    errors: List[str] = []
    for f in NOTES_TEXT_FIELDS:
        if f in data and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    roles = data.get(NOTES_ROLES_FIELD)
    if roles is not None:
        if not isinstance(roles, list):
            errors.append(f"Field '{NOTES_ROLES_FIELD}' must be a list if provided")
        elif not all(is_valid_tag(r) for r in roles):
            errors.append(f"Field '{NOTES_ROLES_FIELD}' must contain only non-empty strings")
    return errors
