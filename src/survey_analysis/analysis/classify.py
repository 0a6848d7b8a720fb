"""Question type inference.

``classify`` looks at *all* answers observed for a question and returns a
single :class:`~survey_analysis.models.QuestionType`. The checks run in a
fixed order and the first match wins:

1. star rating ("4 stars", or every answer a bare digit 1-5)
2. multi-select (any answer contains a comma)
3. single choice (every answer from the five-point satisfaction scale)
4. free text
"""
from __future__ import annotations

import re
from typing import Iterable, List

from survey_analysis.models import QuestionType

SATISFACTION_SCALE = (
    "Very Satisfied",
    "Satisfied",
    "Neutral",
    "Dissatisfied",
    "Very Dissatisfied",
)

STAR_PATTERN = re.compile(r"\b(\d+)\s*stars?\b", re.IGNORECASE)
_BARE_RATING_RE = re.compile(r"^[1-5]$")

MULTI_SELECT_SEPARATOR = ","


def _is_star_rating(samples: List[str]) -> bool:
    if any(STAR_PATTERN.search(s) for s in samples):
        return True
    return all(_BARE_RATING_RE.match(s) for s in samples)


def _is_multi_select(samples: List[str]) -> bool:
    return any(MULTI_SELECT_SEPARATOR in s for s in samples)


def _is_single_choice(samples: List[str]) -> bool:
    return all(s in SATISFACTION_SCALE for s in samples)


_RULES = (
    (QuestionType.STAR_RATING, _is_star_rating),
    (QuestionType.MULTI_SELECT, _is_multi_select),
    (QuestionType.SINGLE_CHOICE, _is_single_choice),
)


def classify(sample_answers: Iterable[str]) -> QuestionType:
    """Return the :class:`QuestionType` for a question given its answers.

    Blank answers are ignored; an empty sample set is ``TEXT``.
    """

    samples = [s.strip() for s in sample_answers if s and s.strip()]
    if not samples:
        return QuestionType.TEXT

    for question_type, matches in _RULES:
        if matches(samples):
            return question_type
    return QuestionType.TEXT
