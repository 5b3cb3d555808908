"""
Module: extractor.pipeline

Purpose:
    Main pipeline orchestrator for question extraction. Coordinates task
    detection, marker location, hierarchy resolution, slicing and mark
    detection to turn raw exam text into a QuestionLedger.

Key Functions:
    - extract_questions(): Text in, QuestionLedger out
    - extract_question_paper(): Document file in, ExtractionResult out

Key Classes:
    - ExtractionResult: Container for extraction output

Dependencies:
    - answersheet_toolkit.extractor.detection: Task and marker detection
    - answersheet_toolkit.extractor.structuring: Marker resolution
    - answersheet_toolkit.extractor.slicing: Body extraction and cleanup
    - answersheet_toolkit.extractor.utils: Document loading

Used By:
    - answersheet_toolkit.answers: Answer collection per question
    - scripts/extract_questions.py: Command-line extraction
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set, Tuple

from answersheet_toolkit.core.models.ledger import QuestionLedger
from answersheet_toolkit.core.models.questions import Question
from answersheet_toolkit.core.models.tasks import TaskSection
from .config import ExtractionConfig
from .detection.marks import detect_marks
from .detection.markers import Marker, locate_markers
from .detection.tasks import find_task_sections
from .diagnostics import DiagnosticsCollector
from .slicing.spans import extract_spans
from .structuring.resolver import resolve_markers
from .utils.document import load_document_text

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """
    Result of extracting a question paper document.

    Attributes:
        ledger: Extracted questions.
        source_path: Document the text was read from.
        text_length: Number of characters extracted from the document.
        warnings: Human-readable warnings (no tasks, tasks without questions).
        diagnostics: Collector used for the run, if any.
    """
    ledger: QuestionLedger
    source_path: Path
    text_length: int
    warnings: List[str] = field(default_factory=list)
    diagnostics: Optional[DiagnosticsCollector] = None

    @property
    def question_count(self) -> int:
        return len(self.ledger)


def _task_markers(
    body: str,
    section: TaskSection,
    config: ExtractionConfig,
    diagnostics: Optional[DiagnosticsCollector],
) -> List[Marker]:
    """Locate and resolve markers, trying the fallback strategies if nothing resolved."""
    markers = resolve_markers(
        locate_markers(body, section.task_number, config),
        section.task_number,
        diagnostics=diagnostics,
        base_offset=section.start,
    )
    if not markers and config.allow_standalone:
        markers = resolve_markers(
            locate_markers(body, section.task_number, config, fallback=True),
            section.task_number,
            diagnostics=diagnostics,
            base_offset=section.start,
        )
    return markers


def _extract_task(
    text: str,
    section: TaskSection,
    config: ExtractionConfig,
    diagnostics: Optional[DiagnosticsCollector],
) -> List[Question]:
    body = section.body(text)
    markers = _task_markers(body, section, config, diagnostics)

    if not markers:
        logger.debug(f"Task {section.task_number}: no question markers found")
        if diagnostics is not None:
            diagnostics.add_no_markers(
                section.task_number,
                section.title,
                (section.start, section.end),
                content=body,
            )
        return []

    preamble, spans = extract_spans(body, markers)
    if preamble:
        logger.debug(f"Task {section.task_number}: preamble of {len(preamble)} chars")

    questions: List[Question] = []
    for span in spans:
        if len(span.text) <= config.min_text_length:
            logger.debug(f"Task {section.task_number}: skipped empty question {span.number}")
            if diagnostics is not None:
                diagnostics.add_short_body(
                    section.task_number,
                    span.number,
                    span.text,
                    (section.start + span.start, section.start + span.end),
                    task_title=section.title,
                )
            continue

        marks = detect_marks(span.raw, default=config.default_marks)
        questions.append(
            Question(
                number=span.number,
                task_number=section.task_number,
                task_title=section.title,
                text=span.text,
                preamble=preamble,
                marks=marks.value,
                marks_source=marks.source,
                offset=section.start + span.marker.offset,
            )
        )
        logger.debug(
            f"Extracted question {span.number} ({marks.value} marks, {marks.source})"
        )

    return questions


def extract_questions(
    text: str,
    config: Optional[ExtractionConfig] = None,
    *,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> QuestionLedger:
    """
    Extract the task/question outline from raw exam text.

    Pipeline:
    1. Split the text into "Task N: Title" sections
    2. For each section:
       a. Locate markers with every primary strategy
       b. Resolve continuation ids, duplicates and reading order
       c. Fall back to a standalone "N Question" marker if nothing resolved
       d. Slice bodies, detect marks and drop bodies that are too short
    3. Assemble the ledger in task order, then offset order

    Never raises on malformed text. Everything skipped is logged and,
    when a collector is given (or config.run_diagnostics is set),
    recorded as a DetectionIssue.

    Args:
        text: Raw text extracted from an exam paper.
        config: Optional extraction configuration.
        diagnostics: Optional collector for skipped content.

    Returns:
        QuestionLedger. Empty when the text holds no task header.

    Example:
        >>> ledger = extract_questions(
        ...     "Task 1: Fire Safety\\n1 (a) Explain evacuation procedures.\\n"
        ...     "(b) Explain fire drills. (6)"
        ... )
        >>> [(q.number, q.marks) for q in ledger]
        [('1(a)', 8), ('1(b)', 6)]
    """
    config = config or ExtractionConfig()
    if diagnostics is None and config.run_diagnostics:
        diagnostics = DiagnosticsCollector()

    sections = find_task_sections(text)
    logger.info(f"Found {len(sections)} tasks")

    questions: List[Question] = []
    seen: Set[Tuple[int, str]] = set()
    for section in sections:
        task_questions = _extract_task(text, section, config, diagnostics)

        kept = 0
        for question in task_questions:
            key = (question.task_number, question.number)
            if key in seen:
                # Same task number headed a second section
                logger.debug(
                    f"Task {section.task_number}: {question.number} already extracted "
                    f"from an earlier section"
                )
                if diagnostics is not None:
                    diagnostics.add_duplicate_marker(
                        section.task_number,
                        question.number,
                        "earlier section",
                        "repeated task section",
                        (question.offset, question.offset),
                    )
                continue
            seen.add(key)
            questions.append(question)
            kept += 1

        logger.info(
            f"Task {section.task_number} ({section.title}): {kept} questions"
        )

    logger.info(f"Total extracted questions: {len(questions)}")
    return QuestionLedger(questions=tuple(questions), tasks=tuple(sections))


def extract_question_paper(
    path: Path,
    config: Optional[ExtractionConfig] = None,
    *,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> ExtractionResult:
    """
    Extract questions from a question paper document.

    Args:
        path: Path to a .pdf, .docx or .txt file.
        config: Optional extraction configuration.
        diagnostics: Optional collector; one is created when
            config.run_diagnostics is set and none is passed.

    Returns:
        ExtractionResult with the ledger and warnings.

    Raises:
        FileNotFoundError: If path doesn't exist.
        UnsupportedDocumentError: If the document type is not supported.

    Example:
        >>> result = extract_question_paper(Path("unit_5_assignment.pdf"))
        >>> print(f"Extracted {result.question_count} questions")
        Extracted 9 questions
    """
    path = Path(path)
    config = config or ExtractionConfig()
    if diagnostics is None and config.run_diagnostics:
        diagnostics = DiagnosticsCollector(source_name=path.name)

    text = load_document_text(path)
    ledger = extract_questions(text, config, diagnostics=diagnostics)

    warnings: List[str] = []
    if not ledger.tasks:
        warnings.append(f"No task headers found in {path.name}")
    for section in ledger.tasks:
        if not ledger.for_task(section.task_number):
            warnings.append(f"Task {section.task_number} ({section.title}): no questions extracted")
    for warning in warnings:
        logger.warning(warning)

    logger.info(f"Completed extraction for {path.name}: {len(ledger)} questions")

    return ExtractionResult(
        ledger=ledger,
        source_path=path,
        text_length=len(text),
        warnings=warnings,
        diagnostics=diagnostics,
    )
