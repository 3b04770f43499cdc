"""
Tests for persisted-state validation.
"""

from roletagger.schema import registry_is_usable, validate_notes, validate_registry


class TestValidateRegistry:
    """Test registry validation."""

    def test_valid_registry(self):
        assert validate_registry(["SWE", "SE"]) == []

    def test_empty_registry_is_valid(self):
        assert validate_registry([]) == []

    def test_not_a_list(self):
        errors = validate_registry({"roles": []})
        assert len(errors) == 1
        assert "list" in errors[0]
        assert not registry_is_usable({"roles": []})

    def test_blank_entry(self):
        errors = validate_registry(["SWE", "  "])
        assert any("Entry 1" in err for err in errors)

    def test_case_insensitive_duplicate(self):
        errors = validate_registry(["SWE", "swe"])
        assert any("duplicates" in err for err in errors)
        assert registry_is_usable(["SWE", "swe"])


class TestValidateNotes:
    """Test notes record validation."""

    def test_valid_notes(self):
        data = {
            "salaryRange": "$1",
            "potentialContracts": "",
            "generalNotes": "ok",
            "potentialRoles": ["SWE"],
        }
        assert validate_notes(data) == []

    def test_partial_notes_valid(self):
        assert validate_notes({"generalNotes": "only this"}) == []

    def test_not_an_object(self):
        assert validate_notes("text") != []

    def test_wrong_field_type(self):
        errors = validate_notes({"salaryRange": 120000})
        assert any("salaryRange" in err for err in errors)

    def test_roles_not_list(self):
        errors = validate_notes({"potentialRoles": "SWE"})
        assert any("potentialRoles" in err for err in errors)

    def test_roles_with_blank(self):
        errors = validate_notes({"potentialRoles": ["SWE", ""]})
        assert any("potentialRoles" in err for err in errors)
