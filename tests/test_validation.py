"""Tests for validation.py - entry field rules."""

from datetime import date

import pytest

from errors import ErrorCode
from validation import clean, is_valid, parse_hours, validate

TODAY = date(2024, 6, 1)


def _fields(**overrides) -> dict:
    fields = {
        "date": "2024-01-05",
        "project": "Acme",
        "task": "Design",
        "hours": "4",
        "description": "",
    }
    fields.update(overrides)
    return fields


class TestValidate:
    """Tests for validate()."""

    def test_valid_fields(self):
        """Test a complete candidate has no errors."""
        assert validate(_fields(), TODAY) == {}
        assert is_valid(_fields(), TODAY)

    def test_typed_values(self):
        """Test already-typed values validate."""
        assert validate(_fields(date=date(2024, 1, 5), hours=4), TODAY) == {}

    def test_description_optional(self):
        """Test description may be missing."""
        fields = _fields()
        del fields["description"]
        assert validate(fields, TODAY) == {}

    @pytest.mark.parametrize("project", ["", "   ", None])
    def test_missing_project(self, project):
        """Test a blank project fails only the project field."""
        errors = validate(_fields(project=project), TODAY)
        assert list(errors) == ["project"]
        assert errors["project"].code is ErrorCode.MISSING_FIELD
        assert errors["project"].message == "Project name is required"

    def test_project_key_absent(self):
        """Test an absent project key fails only the project field."""
        fields = _fields()
        del fields["project"]
        assert list(validate(fields, TODAY)) == ["project"]

    def test_missing_task(self):
        """Test a whitespace task fails."""
        errors = validate(_fields(task="  \t"), TODAY)
        assert list(errors) == ["task"]
        assert errors["task"].code is ErrorCode.MISSING_FIELD

    def test_missing_date(self):
        """Test an empty date fails."""
        errors = validate(_fields(date=""), TODAY)
        assert list(errors) == ["date"]
        assert errors["date"].code is ErrorCode.MISSING_FIELD
        assert errors["date"].message == "Date is required"

    def test_invalid_date(self):
        """Test an unparseable date fails."""
        errors = validate(_fields(date="2024-13-40"), TODAY)
        assert errors["date"].code is ErrorCode.INVALID_DATE

    def test_future_date(self):
        """Test a date after today fails."""
        errors = validate(_fields(date="2024-06-02"), TODAY)
        assert errors["date"].code is ErrorCode.OUT_OF_RANGE
        assert errors["date"].message == "Date cannot be in the future"

    def test_today_allowed(self):
        """Test today's date passes."""
        assert validate(_fields(date="2024-06-01"), TODAY) == {}

    def test_all_errors_collected(self):
        """Test every failing field is reported at once."""
        errors = validate({}, TODAY)
        assert set(errors) == {"date", "project", "task", "hours"}
        assert all(e.code is ErrorCode.MISSING_FIELD for e in errors.values())

    @pytest.mark.parametrize("hours, code, message", [
        (0, ErrorCode.OUT_OF_RANGE, "Hours must be a positive number"),
        ("0", ErrorCode.OUT_OF_RANGE, "Hours must be a positive number"),
        (-1, ErrorCode.OUT_OF_RANGE, "Hours must be a positive number"),
        (25, ErrorCode.OUT_OF_RANGE, "Hours cannot exceed 24"),
        ("24.01", ErrorCode.OUT_OF_RANGE, "Hours cannot exceed 24"),
        ("abc", ErrorCode.NOT_A_NUMBER, "Hours must be a number"),
        ("nan", ErrorCode.NOT_A_NUMBER, "Hours must be a number"),
        ("", ErrorCode.MISSING_FIELD, "Hours are required"),
        (None, ErrorCode.MISSING_FIELD, "Hours are required"),
    ])
    def test_bad_hours(self, hours, code, message):
        """Test each bad hours value gives a single hours error."""
        errors = validate(_fields(hours=hours), TODAY)
        assert list(errors) == ["hours"]
        assert errors["hours"].code is code
        assert errors["hours"].message == message

    @pytest.mark.parametrize("hours", [0.5, 24, 1, "7.5", " 8 "])
    def test_good_hours(self, hours):
        """Test hours within (0, 24] pass."""
        assert validate(_fields(hours=hours), TODAY) == {}

    def test_defaults_to_real_today(self):
        """Test a past date is valid without an explicit today."""
        assert validate(_fields()) == {}


class TestParseHours:
    """Tests for parse_hours()."""

    def test_parses_strings(self):
        assert parse_hours("3.5") == 3.5

    def test_rejects_bool(self):
        assert parse_hours(True) is None

    def test_rejects_text(self):
        assert parse_hours("four") is None


class TestClean:
    """Tests for clean()."""

    def test_coerces_types(self):
        """Test raw form strings become stored types."""
        cleaned = clean(_fields(project="  Acme ", hours="4"))
        assert cleaned == {
            "date": date(2024, 1, 5),
            "project": "Acme",
            "task": "Design",
            "hours": 4.0,
            "description": "",
        }

    def test_partial(self):
        """Test only supplied fields are returned."""
        assert clean({"hours": 5}) == {"hours": 5.0}

    def test_ignores_unknown_and_immutable_keys(self):
        """Test id and createdAt are never passed through."""
        assert clean({"id": "x", "createdAt": "now", "task": "Review"}) == {"task": "Review"}

    def test_description_none(self):
        """Test a None description becomes empty."""
        assert clean({"description": None}) == {"description": ""}

    def test_rejects_bad_hours(self):
        """Test unvalidated garbage raises."""
        with pytest.raises(ValueError):
            clean({"hours": "abc"})
