"""Aggregate normalized responses into per-department summaries."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List

from survey_analysis.analysis.classify import MULTI_SELECT_SEPARATOR, classify
from survey_analysis.analysis.scoring import score
from survey_analysis.models import (
    DepartmentSummary,
    QuestionTally,
    QuestionType,
    Response,
    ScoreTotals,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _QuestionAnswers:
    """Answers collected for one question of one department."""

    question: str
    answers: List[str] = field(default_factory=list)


@dataclass(slots=True)
class _DepartmentState:
    questions: Dict[int, _QuestionAnswers] = field(default_factory=dict)
    response_count: int = 0


def _option_labels(question_type: QuestionType, answer: str) -> List[str]:
    """Return the option labels one *answer* increments."""
    if question_type is QuestionType.MULTI_SELECT:
        tokens = (token.strip() for token in answer.split(MULTI_SELECT_SEPARATOR))
        return [token for token in tokens if token]
    return [answer]


def _tally_question(index: int, collected: _QuestionAnswers) -> QuestionTally:
    # classify once with every answer seen; all answers share that type
    question_type = classify(collected.answers)

    counts: Counter[str] = Counter()
    totals = ScoreTotals()
    for answer in collected.answers:
        counts.update(_option_labels(question_type, answer))
        totals = totals.add(score(question_type, answer))

    return QuestionTally(
        index=index,
        question=collected.question,
        type=question_type,
        option_counts=MappingProxyType(dict(counts)),
        total_answered=len(collected.answers),
        scores=totals,
    )


class DepartmentAggregator:
    """Fold :class:`Response` objects into per-department tallies.

    One aggregator serves exactly one analysis run. Answers are buffered per
    (department, question) so that each question is classified once using all
    of its answers; :py:meth:`finalize` then tallies and scores them.
    """

    def __init__(self) -> None:
        self._departments: Dict[str, _DepartmentState] = {}
        self._finalized = False

    def add(self, response: Response) -> None:
        """Record *response*; departments keep first-seen order."""
        if self._finalized:
            raise RuntimeError("Aggregator already finalized; start a new run.")

        state = self._departments.setdefault(response.department, _DepartmentState())
        state.response_count += 1
        for answer in response.answers:
            collected = state.questions.get(answer.index)
            if collected is None:
                collected = _QuestionAnswers(question=answer.question)
                state.questions[answer.index] = collected
            collected.answers.append(answer.text)

    @property
    def department_count(self) -> int:
        return len(self._departments)

    def finalize(self) -> List[DepartmentSummary]:
        """Classify, tally and score every question; return the summaries."""
        self._finalized = True

        summaries: List[DepartmentSummary] = []
        for department, state in self._departments.items():
            tallies: Dict[int, QuestionTally] = {}
            totals = ScoreTotals()
            for index in sorted(state.questions):
                tally = _tally_question(index, state.questions[index])
                tallies[index] = tally
                totals = totals + tally.scores

            summary = DepartmentSummary(
                department=department,
                question_tallies=MappingProxyType(tallies),
                response_count=state.response_count,
                scores=totals,
            )
            logger.debug(
                "Department %s: responses=%d questions=%d satisfaction=%d dissatisfaction=%d",
                department,
                summary.response_count,
                len(tallies),
                summary.satisfaction,
                summary.dissatisfaction,
            )
            summaries.append(summary)

        return summaries
