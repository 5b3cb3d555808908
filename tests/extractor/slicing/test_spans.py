"""
Tests for extractor.slicing.spans

Test Coverage:
- clean_body(): Mark annotation, note block and blank line removal
- extract_spans(): Body boundaries and task preamble
"""
import pytest

from answersheet_toolkit.extractor.detection.markers import locate_markers
from answersheet_toolkit.extractor.slicing.spans import clean_body, extract_spans
from answersheet_toolkit.extractor.structuring.resolver import resolve_markers


# ─────────────────────────────────────────────────────────────────────────────
# clean_body
# ─────────────────────────────────────────────────────────────────────────────

def test_clean_body_strips_trailing_marks():
    assert clean_body(" Explain fire drills. (6)\n") == "Explain fire drills."


def test_clean_body_strips_marks_at_every_line_end():
    cleaned = clean_body(" Explain the following: (2)\nthe hazards (4)\n")

    assert "(2)" not in cleaned
    assert "(4)" not in cleaned
    assert cleaned.startswith("Explain the following:")


def test_clean_body_keeps_marks_inside_a_line():
    assert clean_body(" Give (2) reasons for the policy.") == "Give (2) reasons for the policy."


def test_clean_body_removes_note_block_to_end():
    raw = " Describe the review.\nNote: refer to the scenario.\nMore note text.\n"

    assert clean_body(raw) == "Describe the review."


def test_clean_body_note_match_is_line_anchored():
    raw = " Explain why the note: field matters here."

    assert clean_body(raw) == "Explain why the note: field matters here."


def test_clean_body_note_case_insensitive():
    assert clean_body(" Describe the review.\n  NOTE: ignore this") == "Describe the review."


def test_clean_body_removes_blank_lines():
    assert clean_body("\n\n Explain things\n\n\nMore lines\n") == "Explain things\nMore lines"


def test_clean_body_empty():
    assert clean_body("  \n (3)\n") == ""


# ─────────────────────────────────────────────────────────────────────────────
# extract_spans
# ─────────────────────────────────────────────────────────────────────────────

def _spans(section, task_number):
    return extract_spans(section, resolve_markers(locate_markers(section, task_number), task_number))


def test_extract_spans_bodies_run_to_next_marker(fire_safety_text):
    section = fire_safety_text[len("Task 1: Fire Safety"):]

    preamble, spans = _spans(section, 1)

    assert preamble == ""
    assert [s.number for s in spans] == ["1(a)", "1(b)"]
    assert spans[0].raw == " Explain evacuation procedures. (8)"
    assert spans[0].end == spans[1].marker.offset
    assert spans[1].end == len(section)
    assert [s.text for s in spans] == ["Explain evacuation procedures.", "Explain fire drills."]


def test_extract_spans_captures_preamble():
    section = "\nScenario: A warehouse stores flammable goods.\n\n1 (a) Explain evacuation procedures.\n"

    preamble, spans = _spans(section, 1)

    assert preamble == "Scenario: A warehouse stores flammable goods."
    assert spans[0].text == "Explain evacuation procedures."


def test_extract_spans_without_markers_returns_section_as_preamble():
    preamble, spans = extract_spans("\n  Read all questions carefully.\n", [])

    assert preamble == "Read all questions carefully."
    assert spans == []


def test_extract_spans_start_never_passes_end():
    section = "\n3 (a) (i) Identify risks.\n(ii) Mitigate risks.\n"

    _, spans = _spans(section, 3)

    assert all(s.start <= s.end for s in spans)
    assert [s.text for s in spans] == ["Identify risks.", "Mitigate risks."]


def test_extract_spans_is_frozen():
    _, spans = _spans("\n1 (a) Explain evacuation procedures.\n", 1)

    with pytest.raises(Exception):
        spans[0].text = "changed"
