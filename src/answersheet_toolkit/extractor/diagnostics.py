"""
Module: extractor.diagnostics

Captures the silent degradations of extraction (tasks without markers,
dropped bodies, orphaned roman numerals, duplicate markers) and generates
diagnostic reports for analysis. Extraction never raises on malformed
text, so this is the only record of what was skipped and why.

Structure:
- Each issue carries the task, the question number involved (if any)
  and the source offsets of the text it refers to
- content_excerpt: Text passed directly by the caller when recording
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)

ISSUE_TYPES = (
    "no_markers",
    "short_body",
    "orphan_roman",
    "duplicate_marker",
    "standalone_discarded",
)


@dataclass
class DetectionIssue:
    """
    A single extraction issue with diagnostic context.

    Fields:
    - task_number / task_title: Task the issue was found in
    - question_number: Candidate id involved, "" for task-level issues
    - span: (start, end) offsets in the source text
    - content_excerpt: Text around the problem, truncated on output
    """
    issue_type: str
    source_name: str
    task_number: int
    message: str
    task_title: str = ""
    question_number: str = ""
    span: Tuple[int, int] = (0, 0)
    content_excerpt: str = ""

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "issue_type": self.issue_type,
            "source_name": self.source_name,
            "task_number": self.task_number,
            "message": self.message,
            "span": list(self.span),
        }

        if self.task_title:
            d["task_title"] = self.task_title
        if self.question_number:
            d["question_number"] = self.question_number
        if self.content_excerpt:
            d["content_excerpt"] = self.content_excerpt[:2000]

        return d


class DiagnosticsCollector:
    """
    Thread-safe collector for extraction issues.

    One collector can be shared by parses running in parallel; each
    issue is tagged with the source_name of the document it came from.
    """

    def __init__(self, source_name: str = ""):
        self.source_name = source_name
        self._issues: List[DetectionIssue] = []
        self._lock = threading.Lock()
        self._sources: Set[str] = set()

    def _add(self, issue: DetectionIssue) -> None:
        with self._lock:
            self._issues.append(issue)
            if issue.source_name:
                self._sources.add(issue.source_name)
        logger.debug(issue.message)

    def add_no_markers(
        self,
        task_number: int,
        task_title: str,
        span: Tuple[int, int],
        content: str = "",
        source_name: Optional[str] = None,
    ) -> None:
        """Record a task section in which no marker matched."""
        self._add(DetectionIssue(
            issue_type="no_markers",
            source_name=source_name if source_name is not None else self.source_name,
            task_number=task_number,
            task_title=task_title,
            message=f"Task {task_number}: no question markers found",
            span=span,
            content_excerpt=content,
        ))

    def add_short_body(
        self,
        task_number: int,
        question_number: str,
        body: str,
        span: Tuple[int, int],
        task_title: str = "",
        source_name: Optional[str] = None,
    ) -> None:
        """Record a marker whose cleaned body was too short to be a question."""
        self._add(DetectionIssue(
            issue_type="short_body",
            source_name=source_name if source_name is not None else self.source_name,
            task_number=task_number,
            task_title=task_title,
            question_number=question_number,
            message=(
                f"Task {task_number}: skipped empty question {question_number} "
                f"({len(body)} chars after cleanup)"
            ),
            span=span,
            content_excerpt=body,
        ))

    def add_orphan_roman(
        self,
        task_number: int,
        roman: str,
        span: Tuple[int, int],
        source_name: Optional[str] = None,
    ) -> None:
        """Record a "(roman)" continuation with no open letter to attach to."""
        self._add(DetectionIssue(
            issue_type="orphan_roman",
            source_name=source_name if source_name is not None else self.source_name,
            task_number=task_number,
            question_number=f"({roman})",
            message=f"Task {task_number}: ({roman}) has no preceding letter part",
            span=span,
        ))

    def add_duplicate_marker(
        self,
        task_number: int,
        question_number: str,
        kept_style: str,
        dropped_style: str,
        span: Tuple[int, int],
        source_name: Optional[str] = None,
    ) -> None:
        """Record a marker discarded because its id was already taken."""
        self._add(DetectionIssue(
            issue_type="duplicate_marker",
            source_name=source_name if source_name is not None else self.source_name,
            task_number=task_number,
            question_number=question_number,
            message=(
                f"Task {task_number}: duplicate {question_number} from {dropped_style} "
                f"(kept {kept_style})"
            ),
            span=span,
        ))

    def add_standalone_discarded(
        self,
        task_number: int,
        span: Tuple[int, int],
        source_name: Optional[str] = None,
    ) -> None:
        """Record a standalone marker dropped because the task has lettered parts."""
        self._add(DetectionIssue(
            issue_type="standalone_discarded",
            source_name=source_name if source_name is not None else self.source_name,
            task_number=task_number,
            question_number=str(task_number),
            message=f"Task {task_number}: standalone question discarded, task is lettered",
            span=span,
        ))

    def issues(self, issue_type: Optional[str] = None) -> List[DetectionIssue]:
        """Snapshot of recorded issues, optionally filtered by type."""
        with self._lock:
            return [i for i in self._issues if issue_type is None or i.issue_type == issue_type]

    def generate_report(self) -> "DetectionDiagnosticsReport":
        with self._lock:
            return DetectionDiagnosticsReport.from_issues(list(self._issues), set(self._sources))

    @property
    def issue_count(self) -> int:
        with self._lock:
            return len(self._issues)


@dataclass
class DetectionDiagnosticsReport:
    """Complete diagnostics report."""
    generated_at: str
    sources: List[str]
    total_issues: int
    summary_by_type: Dict[str, int]
    issues: List[DetectionIssue] = field(default_factory=list)

    @classmethod
    def from_issues(cls, issues: List[DetectionIssue], sources: Set[str]) -> "DetectionDiagnosticsReport":
        summary_by_type: Dict[str, int] = {}
        for issue in issues:
            summary_by_type[issue.issue_type] = summary_by_type.get(issue.issue_type, 0) + 1

        return cls(
            generated_at=datetime.now(timezone.utc).isoformat(),
            sources=sorted(sources),
            total_issues=len(issues),
            summary_by_type=summary_by_type,
            issues=issues,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "sources": self.sources,
            "total_issues": self.total_issues,
            "summary_by_type": self.summary_by_type,
            "issues": [issue.to_dict() for issue in self.issues],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        logger.info(f"Extraction diagnostics saved: {path}")
