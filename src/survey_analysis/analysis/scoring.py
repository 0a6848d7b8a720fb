"""Map a classified answer to a satisfaction or dissatisfaction contribution."""
from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from survey_analysis.analysis.classify import STAR_PATTERN
from survey_analysis.exceptions import ScoringOverflowError
from survey_analysis.models import QuestionType, ScoreResult

logger = logging.getLogger(__name__)

MAX_STARS = 5
SATISFIED_STAR_THRESHOLD = 3

SATISFACTION_WEIGHTS: Dict[str, int] = {
    "Very Satisfied": 100,
    "Satisfied": 75,
    "Neutral": 50,
    "Dissatisfied": 25,
    "Very Dissatisfied": 0,
}
_SATISFIED_CHOICES = ("Very Satisfied", "Satisfied")
_DISSATISFIED_CHOICES = ("Dissatisfied", "Very Dissatisfied")

_BARE_INT_RE = re.compile(r"^\d+$")


def parse_stars(answer: str) -> Optional[int]:
    """Return the star count in *answer* ("4", "4 stars") or ``None``."""
    text = answer.strip()
    if _BARE_INT_RE.match(text):
        return int(text)
    match = STAR_PATTERN.search(text)
    if match:
        return int(match.group(1))
    return None


def _checked(amount: float) -> float:
    if not 0 <= amount <= 100:
        raise ScoringOverflowError(f"Score {amount} outside [0, 100]")
    return amount


def _score_stars(answer: str) -> ScoreResult:
    stars = parse_stars(answer)
    if stars is None:
        return ScoreResult.none()
    if stars >= SATISFIED_STAR_THRESHOLD:
        return ScoreResult.satisfied(_checked(stars * 100 / MAX_STARS))
    return ScoreResult.dissatisfied(_checked((MAX_STARS - stars) * 100 / MAX_STARS))


def _score_choice(answer: str) -> ScoreResult:
    choice = answer.strip()
    weight = SATISFACTION_WEIGHTS.get(choice)
    if weight is None:
        return ScoreResult.none()
    if choice in _SATISFIED_CHOICES:
        return ScoreResult.satisfied(_checked(float(weight)))
    if choice in _DISSATISFIED_CHOICES:
        return ScoreResult.dissatisfied(_checked(float(100 - weight)))
    # Neutral contributes to neither metric
    return ScoreResult.none()


def score(question_type: QuestionType, answer: str) -> ScoreResult:
    """Score *answer* according to *question_type*.

    Multi-select and text answers are never scored. Amounts outside
    ``[0, 100]`` (e.g. "7 stars") are logged and treated as unscored.
    """

    try:
        if question_type is QuestionType.STAR_RATING:
            return _score_stars(answer)
        if question_type is QuestionType.SINGLE_CHOICE:
            return _score_choice(answer)
    except ScoringOverflowError as exc:
        logger.warning("Ignoring out-of-range answer %r: %s", answer, exc)
    return ScoreResult.none()
