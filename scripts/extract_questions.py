"""
Extract the task/question outline from an exam paper.

Prints one line per question (number, marks, opening words) grouped by
task, and optionally writes the ledger as JSON and a diagnostics report
of everything extraction skipped.

Usage:
    python scripts/extract_questions.py paper.pdf --json out/ledger.json --diagnostics out/diag.json
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from answersheet_toolkit.core.utils.serialization import save_ledger_json
from answersheet_toolkit.extractor import (
    DiagnosticsCollector,
    ExtractionConfig,
    UnsupportedDocumentError,
    extract_question_paper,
)

logger = logging.getLogger("extract_questions")


def _preview(text: str, width: int = 60) -> str:
    line = " ".join(text.split())
    return line if len(line) <= width else line[: width - 3] + "..."


def main() -> int:
    parser = argparse.ArgumentParser(description="Extract questions and marks from an exam paper")
    parser.add_argument("document", type=Path, help="Exam paper (.pdf, .docx or .txt)")
    parser.add_argument("--json", type=Path, dest="json_out", help="Write the question ledger to this JSON file")
    parser.add_argument("--diagnostics", type=Path, help="Write an extraction diagnostics report to this JSON file")
    parser.add_argument("--default-marks", type=int, default=8, help="Marks for questions without a (N) annotation")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every marker found")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = ExtractionConfig(default_marks=args.default_marks)
    except ValueError as e:
        parser.error(str(e))

    collector = DiagnosticsCollector(source_name=args.document.name) if args.diagnostics else None

    try:
        result = extract_question_paper(args.document, config, diagnostics=collector)
    except (FileNotFoundError, UnsupportedDocumentError) as e:
        logger.error(f"Error: {e}")
        return 1

    ledger = result.ledger
    print(f"\n{args.document.name}: {len(ledger)} questions, {ledger.total_marks} marks")
    print("=" * 72)
    for key, questions in ledger.group_by_task().items():
        print(key)
        for q in questions:
            flag = "" if q.marks_source == "explicit" else "*"
            print(f"  {q.number:<10} {q.marks:>3}{flag:<1}  {_preview(q.text)}")
    if any(q.marks_source == "default" for q in ledger):
        print(f"\n* default marks ({config.default_marks})")

    if args.json_out:
        save_ledger_json(ledger, args.json_out)
        print(f"\nLedger written to: {args.json_out}")

    if collector is not None:
        report = collector.generate_report()
        report.save(args.diagnostics)
        print(f"Diagnostics: {report.total_issues} issues {report.summary_by_type}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
