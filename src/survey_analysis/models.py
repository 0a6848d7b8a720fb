"""Data structures shared by the analysis engine and its consumers.

Everything handed out by the engine is immutable: dataclasses are frozen
and mappings are exposed through :class:`types.MappingProxyType`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple


class QuestionType(str, Enum):
    """Enumeration of supported question types."""

    STAR_RATING = "StarRating"
    SINGLE_CHOICE = "SingleChoice"
    MULTI_SELECT = "MultiSelect"
    TEXT = "Text"


class ScoreKind(str, Enum):
    """Which metric, if any, an answer contributes to."""

    NONE = "none"
    SATISFIED = "satisfied"
    DISSATISFIED = "dissatisfied"


@dataclass(frozen=True)
class ScoreResult:
    """Structured scoring output for a single answer."""

    kind: ScoreKind
    amount: float = 0.0  # range 0 .. 100, always 0 for NONE

    @classmethod
    def none(cls) -> "ScoreResult":
        return cls(ScoreKind.NONE)

    @classmethod
    def satisfied(cls, amount: float) -> "ScoreResult":
        return cls(ScoreKind.SATISFIED, amount)

    @classmethod
    def dissatisfied(cls, amount: float) -> "ScoreResult":
        return cls(ScoreKind.DISSATISFIED, amount)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "amount": self.amount}


def _percentage(total: float, count: int) -> int:
    """Return ``total / count`` rounded half-up, or 0 when *count* is 0."""
    if count <= 0:
        return 0
    return int(math.floor(total / count + 0.5))


@dataclass(frozen=True)
class ScoreTotals:
    """Running satisfied/dissatisfied sums and counts.

    Instances are immutable; :py:meth:`add` and ``+`` return new totals so
    department totals can be pooled without touching the originals.
    """

    satisfied_sum: float = 0.0
    satisfied_count: int = 0
    dissatisfied_sum: float = 0.0
    dissatisfied_count: int = 0

    def add(self, result: ScoreResult) -> "ScoreTotals":
        if result.kind is ScoreKind.SATISFIED:
            return ScoreTotals(
                self.satisfied_sum + result.amount,
                self.satisfied_count + 1,
                self.dissatisfied_sum,
                self.dissatisfied_count,
            )
        if result.kind is ScoreKind.DISSATISFIED:
            return ScoreTotals(
                self.satisfied_sum,
                self.satisfied_count,
                self.dissatisfied_sum + result.amount,
                self.dissatisfied_count + 1,
            )
        return self

    def __add__(self, other: "ScoreTotals") -> "ScoreTotals":
        if not isinstance(other, ScoreTotals):
            return NotImplemented
        return ScoreTotals(
            self.satisfied_sum + other.satisfied_sum,
            self.satisfied_count + other.satisfied_count,
            self.dissatisfied_sum + other.dissatisfied_sum,
            self.dissatisfied_count + other.dissatisfied_count,
        )

    @property
    def satisfaction(self) -> int:
        """Integer satisfaction percentage (0 when nothing contributed)."""
        return _percentage(self.satisfied_sum, self.satisfied_count)

    @property
    def dissatisfaction(self) -> int:
        """Integer dissatisfaction percentage (0 when nothing contributed)."""
        return _percentage(self.dissatisfied_sum, self.dissatisfied_count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "satisfied_sum": self.satisfied_sum,
            "satisfied_count": self.satisfied_count,
            "dissatisfied_sum": self.dissatisfied_sum,
            "dissatisfied_count": self.dissatisfied_count,
            "satisfaction": self.satisfaction,
            "dissatisfaction": self.dissatisfaction,
        }


@dataclass(frozen=True)
class Answer:
    """One question/answer pair taken from a raw row."""

    index: int
    question: str
    text: str


@dataclass(frozen=True)
class Response:
    """Normalized respondent record: department tag plus ordered answers."""

    department: str
    answers: Tuple[Answer, ...] = ()


@dataclass(frozen=True)
class QuestionTally:
    """Option-count distribution and score totals for one question."""

    index: int
    question: str
    type: QuestionType
    option_counts: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({})
    )
    total_answered: int = 0
    scores: ScoreTotals = field(default_factory=ScoreTotals)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "question": self.question,
            "type": self.type.value,
            "option_counts": dict(self.option_counts),
            "total_answered": self.total_answered,
            "scores": self.scores.to_dict(),
        }


@dataclass(frozen=True)
class DepartmentSummary:
    """Finalized per-department results."""

    department: str
    question_tallies: Mapping[int, QuestionTally] = field(
        default_factory=lambda: MappingProxyType({})
    )
    response_count: int = 0
    scores: ScoreTotals = field(default_factory=ScoreTotals)

    @property
    def satisfaction(self) -> int:
        return self.scores.satisfaction

    @property
    def dissatisfaction(self) -> int:
        return self.scores.dissatisfaction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "department": self.department,
            "response_count": self.response_count,
            "satisfaction": self.satisfaction,
            "dissatisfaction": self.dissatisfaction,
            "scores": self.scores.to_dict(),
            # JSON object keys are strings
            "question_tallies": {
                str(index): tally.to_dict()
                for index, tally in self.question_tallies.items()
            },
        }


@dataclass(frozen=True)
class OverallAnalysis:
    """Complete analysis result handed to renderers."""

    department_count: int
    average_satisfaction: int
    average_dissatisfaction: int
    most_dissatisfied_department: str
    highest_dissatisfaction_rate: int = 0
    department_summaries: Mapping[str, DepartmentSummary] = field(
        default_factory=lambda: MappingProxyType({})
    )
    response_count: int = 0
    skipped_row_count: int = 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – simple helper
        """Return a *plain* ``dict`` (recursively) suitable for JSON."""
        return {
            "overview": {
                "department_count": self.department_count,
                "average_satisfaction": self.average_satisfaction,
                "average_dissatisfaction": self.average_dissatisfaction,
                "most_dissatisfied_department": self.most_dissatisfied_department,
                "highest_dissatisfaction_rate": self.highest_dissatisfaction_rate,
                "response_count": self.response_count,
                "skipped_row_count": self.skipped_row_count,
            },
            "departments": {
                name: summary.to_dict()
                for name, summary in self.department_summaries.items()
            },
        }
