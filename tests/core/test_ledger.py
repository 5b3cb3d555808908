"""
Unit Tests for QuestionLedger Model

Tests for the ordered, read-only collection of extracted questions.
"""

import pytest

from answersheet_toolkit.core.models.ledger import QuestionLedger
from answersheet_toolkit.core.models.questions import Question
from answersheet_toolkit.core.models.tasks import TaskSection


@pytest.fixture
def ledger() -> QuestionLedger:
    tasks = (
        TaskSection(task_number=1, title="Fire Safety", start=19, end=90, header_offset=0),
        TaskSection(task_number=2, title="Audits", start=107, end=160, header_offset=90),
        TaskSection(task_number=3, title="Empty", start=177, end=180, header_offset=160),
    )
    questions = (
        Question("1(a)", 1, "Fire Safety", "Explain evacuation procedures.", marks=8,
                 marks_source="explicit", offset=19),
        Question("1(b)", 1, "Fire Safety", "Explain fire drills.", marks=6,
                 marks_source="explicit", offset=60),
        Question("2", 2, "Audits", "Describe the audit process.", offset=107),
    )
    return QuestionLedger(questions=questions, tasks=tasks)


class TestQuestionLedger:
    """Tests for QuestionLedger dataclass."""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructor Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_empty_then_is_empty(self):
        ledger = QuestionLedger()
        assert ledger.is_empty
        assert len(ledger) == 0
        assert ledger.total_marks == 0

    def test_init_when_duplicate_number_in_task_then_raises_error(self):
        q = Question("1(a)", 1, "Fire Safety", "Explain evacuation procedures.")
        with pytest.raises(ValueError, match="Duplicate question 1\\(a\\) in task 1"):
            QuestionLedger(questions=(q, q))

    # ─────────────────────────────────────────────────────────────────────────
    # Sequence Protocol Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_iter_when_called_then_keeps_order(self, ledger):
        assert [q.number for q in ledger] == ["1(a)", "1(b)", "2"]
        assert ledger.numbers == ["1(a)", "1(b)", "2"]

    def test_getitem_when_indexed_then_returns_question(self, ledger):
        assert ledger[1].number == "1(b)"
        assert ledger[-1].number == "2"

    # ─────────────────────────────────────────────────────────────────────────
    # Query Method Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_total_marks_when_called_then_sums_questions(self, ledger):
        assert ledger.total_marks == 8 + 6 + 8

    def test_for_task_when_called_then_filters_by_task(self, ledger):
        assert [q.number for q in ledger.for_task(1)] == ["1(a)", "1(b)"]
        assert ledger.for_task(3) == []

    def test_get_when_present_then_returns_question(self, ledger):
        assert ledger.get(1, "1(b)").marks == 6

    def test_get_when_missing_then_returns_none(self, ledger):
        assert ledger.get(2, "2(a)") is None

    def test_group_by_task_when_called_then_keys_in_task_order(self, ledger):
        groups = ledger.group_by_task()
        assert list(groups) == ["Task 1: Fire Safety", "Task 2: Audits"]
        assert [q.number for q in groups["Task 1: Fire Safety"]] == ["1(a)", "1(b)"]

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_from_dict_when_from_to_dict_then_equal(self, ledger):
        assert QuestionLedger.from_dict(ledger.to_dict()) == ledger

    def test_to_dict_when_called_then_keeps_empty_tasks(self, ledger):
        d = ledger.to_dict()
        assert [t["task_number"] for t in d["tasks"]] == [1, 2, 3]
        assert len(d["questions"]) == 3

    def test_repr_when_called_then_summarizes(self, ledger):
        assert repr(ledger) == "QuestionLedger(tasks=3, questions=3, marks=22)"
