"""
Unit Tests for Schema Validation

Tests for the validator module.
"""

import pytest

from answersheet_toolkit.core.schemas.validator import (
    LEDGER_SCHEMA_VERSION,
    ValidationError,
    validate_ledger,
    validate_question,
)


class TestValidateQuestion:
    """Tests for validate_question function."""

    @pytest.fixture
    def valid_question_data(self) -> dict:
        """Create valid question data for testing."""
        return {
            "number": "3(a)(ii)",
            "task_number": 3,
            "task_title": "Audits",
            "text": "Mitigate the identified risks.",
            "preamble": "",
            "marks": 4,
            "marks_source": "explicit",
            "offset": 42,
        }

    def test_validate_when_valid_then_passes(self, valid_question_data):
        validate_question(valid_question_data)

    def test_validate_when_optional_fields_missing_then_passes(self):
        validate_question({"number": "4", "task_number": 4, "text": "Explain the process."})

    def test_validate_when_missing_fields_then_lists_them(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_question({"number": "1(a)"})
        assert exc_info.value.errors == ["Missing field: task_number", "Missing field: text"]

    def test_validate_when_bad_number_then_raises_with_path(self, valid_question_data):
        valid_question_data["number"] = "3 (a)"
        with pytest.raises(ValidationError, match="does not match") as exc_info:
            validate_question(valid_question_data, "questions[2]")
        assert exc_info.value.path == "questions[2].number"

    def test_validate_when_task_number_zero_then_raises(self, valid_question_data):
        valid_question_data["task_number"] = 0
        with pytest.raises(ValidationError, match="less than the minimum of 1"):
            validate_question(valid_question_data)

    def test_validate_when_marks_not_int_then_raises(self, valid_question_data):
        valid_question_data["marks"] = "4"
        with pytest.raises(ValidationError, match="is not of type 'integer'") as exc_info:
            validate_question(valid_question_data)
        assert exc_info.value.path == "marks"

    def test_validate_when_unknown_marks_source_then_raises(self, valid_question_data):
        valid_question_data["marks_source"] = "aggregate"
        with pytest.raises(ValidationError, match="is not one of"):
            validate_question(valid_question_data)

    @pytest.mark.parametrize(
        "field,value",
        [("text", 12345), ("task_title", None), ("preamble", ["intro"]), ("offset", "42"), ("offset", -1)],
    )
    def test_validate_when_field_has_wrong_type_then_raises_with_path(
        self, valid_question_data, field, value
    ):
        valid_question_data[field] = value
        with pytest.raises(ValidationError, match="Schema validation failed") as exc_info:
            validate_question(valid_question_data)
        assert exc_info.value.path == field

    def test_validate_when_text_too_short_then_raises(self, valid_question_data):
        valid_question_data["text"] = "Too short"
        with pytest.raises(ValidationError, match="too short"):
            validate_question(valid_question_data)

    def test_validate_when_not_dict_then_raises(self):
        with pytest.raises(ValidationError, match="question must be a dict"):
            validate_question(["1(a)"])  # type: ignore


class TestValidateLedger:
    """Tests for validate_ledger function."""

    def test_validate_when_empty_ledger_then_passes(self):
        validate_ledger({"schema_version": LEDGER_SCHEMA_VERSION, "tasks": [], "questions": []})

    def test_validate_when_wrong_version_then_raises(self):
        with pytest.raises(ValidationError, match="Unsupported ledger schema version: 1"):
            validate_ledger({"schema_version": 1, "questions": []})

    def test_validate_when_questions_not_list_then_raises(self):
        with pytest.raises(ValidationError, match="is not of type 'array'"):
            validate_ledger({"schema_version": LEDGER_SCHEMA_VERSION, "questions": {}})

    def test_validate_when_task_missing_range_then_raises(self):
        data = {
            "schema_version": LEDGER_SCHEMA_VERSION,
            "tasks": [{"task_number": 1, "title": "Fire Safety"}],
        }
        with pytest.raises(ValidationError, match="is a required property") as exc_info:
            validate_ledger(data)
        assert exc_info.value.path == "tasks[0]"

    def test_validate_when_nested_question_invalid_then_reports_index(self):
        data = {
            "schema_version": LEDGER_SCHEMA_VERSION,
            "questions": [
                {"number": "1(a)", "task_number": 1, "text": "Explain evacuation."},
                {"number": "1(b)", "task_number": -1, "text": "Explain fire drills."},
            ],
        }
        with pytest.raises(ValidationError) as exc_info:
            validate_ledger(data)
        assert exc_info.value.path == "questions[1].task_number"

    def test_validate_when_task_not_dict_then_raises(self):
        data = {"schema_version": LEDGER_SCHEMA_VERSION, "tasks": [5]}
        with pytest.raises(ValidationError, match="is not of type 'object'") as exc_info:
            validate_ledger(data)
        assert exc_info.value.path == "tasks[0]"

    def test_validate_when_task_range_not_int_then_raises(self):
        data = {
            "schema_version": LEDGER_SCHEMA_VERSION,
            "tasks": [{"task_number": 1, "start": "x", "end": 3}],
        }
        with pytest.raises(ValidationError, match="is not of type 'integer'") as exc_info:
            validate_ledger(data)
        assert exc_info.value.path == "tasks[0].start"

    def test_validate_when_ledger_not_dict_then_raises(self):
        with pytest.raises(ValidationError, match="ledger must be a dict"):
            validate_ledger([])  # type: ignore
