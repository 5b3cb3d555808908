import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import answersheet_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


FIRE_SAFETY_TEXT = (
    "Task 1: Fire Safety\n"
    "1 (a) Explain evacuation procedures. (8)\n"
    "(b) Explain fire drills. (6)\n"
)

SAMPLE_PAPER_TEXT = (
    "NEBOSH National General Certificate\n"
    "Task 1: Fire Safety\n"
    "Scenario: A warehouse stores flammable goods.\n"
    "1 (a) Explain evacuation procedures for the warehouse. (8)\n"
    "(b) Explain why fire drills should be carried out. (6)\n"
    "Task 2: Risk Assessment\n"
    "2 (a) (i) Identify hazards in the loading bay. (4)\n"
    "(ii) Outline suitable control measures. (5)\n"
    "(b) Describe how the assessment should be reviewed.\n"
    "Note: refer to the scenario above.\n"
    "Task 3: Reporting\n"
    "3 Describe the process for reporting accidents to the enforcing authority. (10)\n"
)


# Common test fixtures
@pytest.fixture
def fire_safety_text() -> str:
    """Two-part task: explicit "1 (a)" then a "(b)" continuation."""
    return FIRE_SAFETY_TEXT


@pytest.fixture
def sample_paper_text() -> str:
    """
    Three tasks covering the common layouts.

    Expected ledger: 1(a)=8, 1(b)=6, 2(a)(i)=4, 2(a)(ii)=5, 2(b)=8 (default), 3=10.
    """
    return SAMPLE_PAPER_TEXT


@pytest.fixture
def sample_paper_file(tmp_path: Path) -> Path:
    """SAMPLE_PAPER_TEXT written to a .txt file."""
    path = tmp_path / "unit_ig1_assignment.txt"
    path.write_text(SAMPLE_PAPER_TEXT, encoding="utf-8")
    return path
