"""
Tests for candidate notes persistence.
"""

import json

import pytest

from roletagger.notes import CandidateNotes, NotesRepository
from roletagger.storage import MemoryStore


class TestCandidateNotes:
    """Test the notes record."""

    def test_defaults(self):
        notes = CandidateNotes()
        assert notes.to_dict() == {
            "salaryRange": "",
            "potentialContracts": "",
            "generalNotes": "",
            "potentialRoles": [],
        }

    def test_from_dict_merges_over_defaults(self):
        notes = CandidateNotes.from_dict({"generalNotes": "hello"})
        assert notes.general_notes == "hello"
        assert notes.salary_range == ""
        assert notes.potential_roles == []

    def test_from_dict_skips_bad_fields(self):
        notes = CandidateNotes.from_dict({"salaryRange": 5, "potentialRoles": ["SWE", "", "swe", 3]})
        assert notes.salary_range == ""
        assert notes.potential_roles == ["SWE"]


class TestNotesRepository:
    """Test loading and saving notes."""

    def test_missing_gives_empty_notes(self, memory_store):
        assert NotesRepository(memory_store).load("1") == CandidateNotes()

    def test_load_existing(self, json_store):
        notes = NotesRepository(json_store).load(7)
        assert notes.salary_range == "$120k - $140k"
        assert notes.potential_contracts == "Project Phoenix"
        assert notes.potential_roles == ["SWE"]

    def test_legacy_plain_text(self, quiet_logger):
        store = MemoryStore({"rms-notes-3": "call back in May"})
        notes = NotesRepository(store).load("3")
        assert notes.general_notes == "call back in May"
        assert notes.potential_roles == []
        assert quiet_logger.get_metrics()["fallbacks_by_key"] == {"rms-notes-3": 1}

    def test_legacy_non_object_json(self):
        store = MemoryStore({"rms-notes-3": "42"})
        assert NotesRepository(store).load("3").general_notes == "42"

    def test_save_roles_keeps_other_fields(self, json_store):
        repository = NotesRepository(json_store)
        repository.save_roles("7", ["SWE", "DBA"])
        stored = json.loads(json_store.get_item("rms-notes-7"))
        assert stored["potentialRoles"] == ["SWE", "DBA"]
        assert stored["potentialContracts"] == "Project Phoenix"

    def test_save_roles_new_candidate(self, memory_store):
        NotesRepository(memory_store).save_roles("new", ["SE"])
        stored = json.loads(memory_store.get_item("rms-notes-new"))
        assert stored == {
            "salaryRange": "",
            "potentialContracts": "",
            "generalNotes": "",
            "potentialRoles": ["SE"],
        }

    def test_update_field(self, json_store):
        notes = NotesRepository(json_store).update_field("7", "general_notes", "Follow up")
        assert notes.general_notes == "Follow up"
        assert notes.potential_roles == ["SWE"]

    def test_update_unknown_field(self, memory_store):
        with pytest.raises(KeyError):
            NotesRepository(memory_store).update_field("1", "potential_roles", "SWE")
