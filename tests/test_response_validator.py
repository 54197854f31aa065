"""Tests for response validation."""

import copy

import pytest

from promptform.models import FieldDefinition, FieldType
from promptform.validation import validate_responses

from conftest import VALID_RESPONSES, make_fields


def _field(field_type, **kwargs):
    kwargs.setdefault("field_id", "f")
    kwargs.setdefault("display_name", "Field")
    return FieldDefinition(type=field_type, **kwargs)


class TestRequired:
    """Mandatory field handling."""

    def test_valid_responses(self):
        """Test a complete, valid response set."""
        assert validate_responses(make_fields(), VALID_RESPONSES) == {}

    @pytest.mark.parametrize("empty", [None, "", "   ", [], {}, False])
    def test_empty_values_fail_mandatory(self, empty):
        """Test every flavour of empty answer."""
        field = _field(FieldType.SINGLE_LINE, display_name="Company", mandatory=True)
        assert validate_responses([field], {"f": empty}) == {"f": "Company is required"}

    def test_missing_key_fails_mandatory(self):
        """Test an absent answer."""
        field = _field(FieldType.EMAIL, field_id="email", display_name="Email", mandatory=True)
        assert validate_responses([field], {}) == {"email": "Email is required"}

    def test_optional_empty_is_fine(self):
        """Test optional fields may be left blank."""
        field = _field(FieldType.DATE)
        assert validate_responses([field], {"f": ""}) == {}

    def test_all_fields_checked(self):
        """Test that every failing field is reported."""
        errors = validate_responses(make_fields(), {"email": "nope", "rating": 9})
        assert set(errors) == {"name", "email", "rating"}

    def test_unknown_keys_ignored(self):
        """Test extra answers do not cause errors."""
        responses = dict(VALID_RESPONSES, unexpected="value")
        assert validate_responses(make_fields(), responses) == {}

    def test_inputs_not_mutated(self):
        """Test validation leaves its inputs alone."""
        fields = make_fields()
        responses = copy.deepcopy(VALID_RESPONSES)
        responses["email"] = "bad"
        before_fields = [f.model_copy(deep=True) for f in fields]
        before_responses = copy.deepcopy(responses)

        validate_responses(fields, responses)

        assert fields == before_fields
        assert responses == before_responses

    def test_accepts_wire_dicts(self):
        """Test fields given as wire dicts."""
        fields = [{"fieldId": "n", "type": "NAME", "displayName": "Name", "mand": True}]
        assert validate_responses(fields, {}) == {"n": "Name is required"}


class TestTypeChecks:
    """Per-type value checks."""

    @pytest.mark.parametrize("value", ["user@example.com", "a.b@c.co"])
    def test_email_valid(self, value):
        assert validate_responses([_field(FieldType.EMAIL)], {"f": value}) == {}

    @pytest.mark.parametrize("value", ["user@", "user example.com", "a@b", "ada@example.com\n"])
    def test_email_invalid(self, value):
        errors = validate_responses([_field(FieldType.EMAIL)], {"f": value})
        assert errors == {"f": "Field must be a valid email address"}

    def test_phone(self):
        """Test phone character set."""
        field = _field(FieldType.PHONE)
        assert validate_responses([field], {"f": "+1 (555) 010-2030"}) == {}
        assert validate_responses([field], {"f": "call me"}) == {"f": "Field must be a valid phone number"}
        assert validate_responses([field], {"f": "555 0100\n"}) == {"f": "Field must be a valid phone number"}

    @pytest.mark.parametrize("value", ["2023-02-29", "29/02/2024", "2024-1-5", "2024-01-05T10:00", " 2024-01-05"])
    def test_date_invalid(self, value):
        field = _field(FieldType.DATE)
        assert validate_responses([field], {"f": value}) == {"f": "Field must be a valid date (YYYY-MM-DD)"}

    def test_date(self):
        """Test ISO calendar dates."""
        field = _field(FieldType.DATE)
        assert validate_responses([field], {"f": "2024-02-29"}) == {}
        assert validate_responses([field], {"f": "2024-01-05"}) == {}

    def test_dropdown_membership(self):
        """Test single choice must be one of the choices."""
        field = _field(FieldType.DROPDOWN, choices=["S", "M", "L"])
        assert validate_responses([field], {"f": "M"}) == {}
        assert validate_responses([field], {"f": "XL"}) == {"f": "Field must be one of: S, M, L"}

    def test_multiple_choice(self):
        """Test subsets of choices."""
        field = _field(FieldType.MULTIPLE_CHOICE, choices=["Red", "Green", "Blue"])
        assert validate_responses([field], {"f": ["Red", "Blue"]}) == {}
        assert validate_responses([field], {"f": ["Red", "Pink"]}) == {
            "f": "Field contains invalid options: Pink"
        }
        assert "f" in validate_responses([field], {"f": "Red"})

    def test_checkbox_with_choices(self):
        """Test CHECKBOX with choices behaves like a multi-select."""
        field = _field(FieldType.CHECKBOX, choices=["Email", "SMS"])
        assert validate_responses([field], {"f": ["SMS"]}) == {}
        assert "f" in validate_responses([field], {"f": ["Fax"]})

    def test_checkbox_without_choices(self):
        """Test legacy single checkbox accepts a boolean."""
        field = _field(FieldType.CHECKBOX)
        assert validate_responses([field], {"f": True}) == {}
        assert validate_responses([field], {"f": "true"}) == {}
        assert validate_responses([field], {"f": "false"}) == {}
        assert "f" in validate_responses([field], {"f": "maybe"})

    @pytest.mark.parametrize("unchecked", [False, "false"])
    def test_required_checkbox_unchecked(self, unchecked):
        """Test an unchecked required box fails whether sent as a bool or a string."""
        field = _field(FieldType.CHECKBOX, field_id="agree", display_name="Agree", mandatory=True)
        assert validate_responses([field], {"agree": unchecked}) == {"agree": "Agree is required"}
        assert validate_responses([field], {"agree": "true"}) == {}

    @pytest.mark.parametrize("value, ok", [(1, True), (5, True), (0, False), (6, False), (True, False), ("3", False)])
    def test_rating(self, value, ok):
        """Test ratings are integers from 1 to 5."""
        errors = validate_responses([_field(FieldType.RATING)], {"f": value})
        assert (errors == {}) is ok

    def test_file_upload(self):
        """Test uploads are file descriptors."""
        field = _field(FieldType.FILE_UPLOAD)
        descriptor = {"storageId": "abc", "url": "https://cdn.example.com/abc.png", "fileName": "abc.png"}
        assert validate_responses([field], {"f": descriptor}) == {}
        assert validate_responses([field], {"f": "abc.png"}) == {"f": "Field must be an uploaded file"}
        assert "f" in validate_responses([field], {"f": {"fileName": "abc.png"}})

    def test_grid(self):
        """Test each row selects one column."""
        field = _field(FieldType.GRID, choices=["Speed", "Taste"], grid_options=["Bad", "Good"])
        assert validate_responses([field], {"f": {"Speed": "Good", "Taste": "Bad"}}) == {}
        assert "f" in validate_responses([field], {"f": {"Speed": "Great"}})
        assert "f" in validate_responses([field], {"f": {"Price": "Good"}})

    def test_signature_is_text(self):
        field = _field(FieldType.SIGNATURE)
        assert validate_responses([field], {"f": "Ada L."}) == {}
        assert validate_responses([field], {"f": 42}) == {"f": "Field must be text"}


class TestCustomRules:
    """minLength, maxLength and pattern."""

    def _field(self, **validation):
        return _field(FieldType.SINGLE_LINE, display_name="Code", validation=validation)

    def test_min_length(self):
        errors = validate_responses([self._field(min_length=3)], {"f": "ab"})
        assert errors == {"f": "Code must be at least 3 characters"}

    def test_max_length(self):
        errors = validate_responses([self._field(max_length=3)], {"f": "abcd"})
        assert errors == {"f": "Code must be at most 3 characters"}

    def test_pattern_uses_search(self):
        """Test the pattern may match anywhere unless anchored."""
        field = self._field(pattern=r"\d{3}")
        assert validate_responses([field], {"f": "abc123"}) == {}
        assert validate_responses([field], {"f": "abc"}) == {"f": "Code has an invalid format"}

    def test_first_failure_wins(self):
        """Test only one message per field."""
        field = self._field(min_length=5, pattern=r"^\d+$")
        assert validate_responses([field], {"f": "ab"}) == {"f": "Code must be at least 5 characters"}

    def test_type_check_before_rules(self):
        """Test an invalid email reports the type problem first."""
        field = _field(FieldType.EMAIL, display_name="Email", validation={"min_length": 50})
        assert validate_responses([field], {"f": "bad"}) == {"f": "Email must be a valid email address"}
