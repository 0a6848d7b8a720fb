"""Turn raw survey rows into :class:`~survey_analysis.models.Response` records."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

from survey_analysis.exceptions import MalformedRowError
from survey_analysis.models import Answer, Response

DEPARTMENT_COLUMN = "Department"
UNKNOWN_DEPARTMENT = "Unknown"
NO_ANSWER = "No answer"

_QUESTION_RE = re.compile(r"^\s*Question\s+([1-9]\d*)\s*$")
_ANSWER_RE = re.compile(r"^\s*Answer\s+([1-9]\d*)\s*$")


def _clean(value: Any) -> Optional[str]:
    """Return *value* as a stripped string, or ``None`` when blank."""
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    text = text.strip()
    return text or None


def _numbered_columns(row: Mapping[str, Any], pattern: re.Pattern) -> Dict[int, Any]:
    columns: Dict[int, Any] = {}
    for key, value in row.items():
        match = pattern.match(str(key))
        if match:
            # first column wins if a header is duplicated with odd spacing
            columns.setdefault(int(match.group(1)), value)
    return columns


def normalize_row(row: Mapping[str, Any]) -> Response:
    """Convert one raw *row* into a :class:`Response`.

    Pairs are emitted in question-number order. A pair is dropped when either
    side is blank or the answer is the ``"No answer"`` sentinel.

    Raises
    ------
    MalformedRowError
        If no usable question/answer pair remains.
    """

    department = _clean(row.get(DEPARTMENT_COLUMN)) or UNKNOWN_DEPARTMENT

    questions = _numbered_columns(row, _QUESTION_RE)
    answers = _numbered_columns(row, _ANSWER_RE)

    pairs: List[Answer] = []
    for index in sorted(questions):
        question = _clean(questions[index])
        answer = _clean(answers.get(index))
        if question is None or answer is None or answer == NO_ANSWER:
            continue
        pairs.append(Answer(index=index, question=question, text=answer))

    if not pairs:
        raise MalformedRowError(
            f"Row for department '{department}' has no usable question/answer pairs."
        )

    return Response(department=department, answers=tuple(pairs))
