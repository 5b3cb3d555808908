"""
Tests for extractor.detection.markers

Test Coverage:
- MarkerStrategy.find(): Each marker style in isolation
- locate_markers(): Scan order, primary vs fallback strategies
- Marker: Derived properties
"""
import pytest

from answersheet_toolkit.extractor.config import ExtractionConfig
from answersheet_toolkit.extractor.detection.markers import (
    MARKER_STRATEGIES,
    Marker,
    MarkerStyle,
    get_strategy,
    locate_markers,
)


def _find(style, section, task_number=1, config=None):
    return get_strategy(style).find(section, task_number, config)


def test_lettered_strategy_finds_spaced_marker():
    markers = _find(MarkerStyle.LETTERED, "\n1 (a) Explain evacuation.\n  1  ( B ) Explain drills.")

    assert [m.candidate_id for m in markers] == ["1(a)", "1(b)"]
    assert markers[0].offset == 0
    assert markers[0].matched_text == "\n1 (a)"
    assert markers[0].end == 6


def test_lettered_strategy_anchored_to_task_number():
    """'12 (a)' is not a marker for task 1 or task 2."""
    section = "\n12 (a) Explain.\n"

    assert _find(MarkerStyle.LETTERED, section, 1) == []
    assert _find(MarkerStyle.LETTERED, section, 2) == []
    assert _find(MarkerStyle.LETTERED, section, 12)[0].candidate_id == "12(a)"


def test_lettered_strategy_requires_line_start():
    assert _find(MarkerStyle.LETTERED, "\nsee 1 (a) above for details") == []


def test_compact_strategy_requires_no_space():
    section = "\n1(a) Explain.\n1 (b) Explain.\n"

    markers = _find(MarkerStyle.COMPACT, section)

    assert [m.candidate_id for m in markers] == ["1(a)"]
    assert markers[0].style == MarkerStyle.COMPACT


def test_nested_strategy_captures_letter_and_roman():
    markers = _find(MarkerStyle.NESTED, "\n3 (a) (i) Identify risks.\n3(b)(iv) Mitigate.", 3)

    assert [m.candidate_id for m in markers] == ["3(a)(i)", "3(b)(iv)"]
    assert markers[0].is_nested
    assert markers[0].parent_letter == "a"
    assert markers[0].label == "i"


def test_nested_strategy_rejects_unknown_roman():
    """'mm' uses roman letters but is not a sub-part numeral."""
    assert _find(MarkerStyle.NESTED, "\n3 (a) (mm) Text here.", 3) == []


def test_letter_continuation_is_unresolved():
    markers = _find(MarkerStyle.LETTER_CONTINUATION, "\n1 (a) Explain.\n(b) Explain drills.\n")

    assert len(markers) == 1
    assert markers[0].label == "b"
    assert markers[0].candidate_id is None
    assert markers[0].is_continuation
    assert not markers[0].is_resolved


def test_letter_continuation_skips_roman_tokens():
    """(i), (v) and (x) are read as roman numerals."""
    section = "\n(i) First.\n(v) Fifth.\n(x) Tenth.\n(c) Third letter.\n"

    assert [m.label for m in _find(MarkerStyle.LETTER_CONTINUATION, section)] == ["c"]
    assert [m.label for m in _find(MarkerStyle.ROMAN_CONTINUATION, section)] == ["i", "v", "x"]


def test_roman_continuation_skips_multi_letter_words():
    section = "\n(ii) Second.\n(see) Not a marker.\n"

    markers = _find(MarkerStyle.ROMAN_CONTINUATION, section)

    assert [m.label for m in markers] == ["ii"]
    assert markers[0].is_nested
    assert markers[0].parent_letter is None


def test_roman_continuation_respects_config_numerals():
    config = ExtractionConfig(roman_numerals=("i", "ii", "iii"))

    assert _find(MarkerStyle.ROMAN_CONTINUATION, "\n(iv) Fourth.", config=config) == []


def test_roman_continuation_accepts_upper_case_config_numerals():
    config = ExtractionConfig(roman_numerals=("I", "II", "III"))

    markers = _find(MarkerStyle.ROMAN_CONTINUATION, "\n(ii) Second.", config=config)

    assert [m.label for m in markers] == ["ii"]


def test_standalone_strategy_requires_capital_letter():
    assert _find(MarkerStyle.STANDALONE, "\n4 Explain the process.", 4)[0].candidate_id == "4"
    assert _find(MarkerStyle.STANDALONE, "\n4 explain the process.", 4) == []


def test_standalone_strategy_keeps_first_match_only():
    markers = _find(MarkerStyle.STANDALONE, "\n4 Explain one.\n4 Explain two.\n", 4)

    assert len(markers) == 1
    assert markers[0].offset == 0


def test_locate_markers_returns_scan_order():
    """Strategy order first, text order within a strategy."""
    section = "\n1 (a) (i) Identify.\n(ii) Mitigate.\n(b) Explain.\n1(c) Describe.\n"

    markers = locate_markers(section, 1)

    assert [m.style for m in markers] == [
        MarkerStyle.LETTERED,
        MarkerStyle.COMPACT,
        MarkerStyle.NESTED,
        MarkerStyle.LETTER_CONTINUATION,
        MarkerStyle.ROMAN_CONTINUATION,
    ]


def test_locate_markers_primary_excludes_standalone():
    assert locate_markers("\n4 Explain the process.", 4) == []


def test_locate_markers_fallback_runs_standalone_only():
    section = "\n4 Explain the process.\n(b) Ignored in fallback.\n"

    markers = locate_markers(section, 4, fallback=True)

    assert [m.style for m in markers] == [MarkerStyle.STANDALONE]


def test_locate_markers_returns_fresh_list():
    section = "\n1 (a) Explain.\n"

    first = locate_markers(section, 1)
    first.clear()

    assert len(locate_markers(section, 1)) == 1


def test_strategies_registered_once_per_style():
    assert [s.style for s in MARKER_STRATEGIES] == list(MarkerStyle)
    assert [s.style for s in MARKER_STRATEGIES if s.fallback] == [MarkerStyle.STANDALONE]


def test_marker_is_frozen():
    marker = Marker(offset=0, matched_text="\n1 (a)", style=MarkerStyle.LETTERED, candidate_id="1(a)", label="a")

    assert marker.is_lettered
    with pytest.raises(Exception):
        marker.offset = 5
