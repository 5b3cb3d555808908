"""
Module: extractor.detection.tasks

Purpose:
    Task header detection - splits extracted exam text into task sections
    introduced by "Task N: Title" headers.

Key Functions:
    - find_task_sections(): Locate all task sections in document order

Dependencies:
    - re (std)
    - answersheet_toolkit.core.models: TaskSection

Used By:
    - extractor.pipeline: First stage of extraction
"""

from __future__ import annotations

import logging
import re
from typing import List

from answersheet_toolkit.core.models.tasks import TaskSection

logger = logging.getLogger(__name__)

# Title is the rest of the header line only
TASK_HEADER_RE = re.compile(r"Task\s+(\d+):[ \t]*([^\n]*)", re.IGNORECASE)


def find_task_sections(text: str) -> List[TaskSection]:
    """
    Locate every "Task N: Title" section in the text.

    A section body runs from just after its header to the start of the
    next header, or to the end of the text. Sections keep text order;
    they are never sorted by number.

    Args:
        text: Raw text extracted from an exam paper.

    Returns:
        List of TaskSection in the order the headers appear. Empty if
        the text contains no task header.

    Example:
        >>> sections = find_task_sections("Task 1: Fire Safety\\n1 (a) ...")
        >>> sections[0].task_number, sections[0].title
        (1, 'Fire Safety')
    """
    headers = [m for m in TASK_HEADER_RE.finditer(text) if int(m.group(1)) > 0]

    sections: List[TaskSection] = []
    for i, match in enumerate(headers):
        end = headers[i + 1].start() if i + 1 < len(headers) else len(text)
        sections.append(
            TaskSection(
                task_number=int(match.group(1)),
                title=match.group(2).strip(),
                start=match.end(),
                end=end,
                header_offset=match.start(),
            )
        )

    logger.debug(f"Found {len(sections)} tasks")
    return sections
