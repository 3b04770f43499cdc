"""
Per-candidate private notes, including the candidate's potential roles.

The role selection is one field of the notes record; every change rewrites
the whole record under the candidate's key.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .logger import StructuredLogger, get_logger
from .schema import NOTES_ROLES_FIELD, validate_notes
from .selection import SelectionState
from .tags import is_valid_tag

NOTES_KEY_PREFIX = "rms-notes-"

# attribute name -> persisted field name
TEXT_FIELDS = {
    "salary_range": "salaryRange",
    "potential_contracts": "potentialContracts",
    "general_notes": "generalNotes",
}


@dataclass
class CandidateNotes:
    salary_range: str = ""
    potential_contracts: str = ""
    general_notes: str = ""
    potential_roles: List[str] = field(default_factory=list)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "CandidateNotes":
        """Merge a stored record over the defaults, skipping fields of the wrong type."""
        notes = CandidateNotes()
        for attr, name in TEXT_FIELDS.items():
            value = data.get(name)
            if isinstance(value, str):
                setattr(notes, attr, value)
        roles = data.get(NOTES_ROLES_FIELD)
        if isinstance(roles, list):
            notes.potential_roles = SelectionState.from_iterable(r for r in roles if is_valid_tag(r)).to_list()
        return notes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "salaryRange": self.salary_range,
            "potentialContracts": self.potential_contracts,
            "generalNotes": self.general_notes,
            "potentialRoles": list(self.potential_roles),
        }


class NotesRepository:
    """Loads and saves CandidateNotes records from a key/value store."""

    def __init__(self, store, logger: Optional[StructuredLogger] = None):
        self.store = store
        self.log = logger or get_logger()

    @staticmethod
    def key_for(candidate_id) -> str:
        return f"{NOTES_KEY_PREFIX}{candidate_id}"

    def load(self, candidate_id) -> CandidateNotes:
        """
        Read a candidate's notes.

        Missing records give empty notes. Text that is not a JSON object is
        treated as legacy plain-text notes and kept as general_notes.
        """
        key = self.key_for(candidate_id)
        raw = self.store.get_item(key)
        if raw is None:
            return CandidateNotes()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            self._legacy(key)
            return CandidateNotes(general_notes=raw)

        if not isinstance(data, dict):
            self._legacy(key)
            return CandidateNotes(general_notes=raw)

        problems = validate_notes(data)
        if problems:
            self.log.warning("Notes fields ignored on load", key=key, problems=problems)
        return CandidateNotes.from_dict(data)

    def save(self, candidate_id, notes: CandidateNotes) -> None:
        self.store.set_item(self.key_for(candidate_id), json.dumps(notes.to_dict(), ensure_ascii=False))

    def save_roles(self, candidate_id, roles: Iterable[str]) -> CandidateNotes:
        notes = self.load(candidate_id)
        notes.potential_roles = list(roles)
        self.save(candidate_id, notes)
        return notes

    def update_field(self, candidate_id, name: str, value: str) -> CandidateNotes:
        """Set one free-text field (salary_range, potential_contracts, general_notes)."""
        if name not in TEXT_FIELDS:
            raise KeyError(f"Unknown notes field: {name!r}")
        notes = self.load(candidate_id)
        setattr(notes, name, value)
        self.save(candidate_id, notes)
        return notes

    def _legacy(self, key: str) -> None:
        self.log.warning("Notes are not a JSON object, reading as plain text", key=key)
        self.log.record_store_fallback(key)
