"""Unit tests for reporting.assembler."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from survey_analysis.models import DepartmentSummary, ScoreResult, ScoreTotals
from survey_analysis.reporting.assembler import assemble


def _summary(name: str, *results: ScoreResult) -> DepartmentSummary:
    totals = ScoreTotals()
    for result in results:
        totals = totals.add(result)
    return DepartmentSummary(department=name, scores=totals, response_count=len(results))


def test_two_department_example():
    analysis = assemble(
        [
            _summary("A", ScoreResult.satisfied(100), ScoreResult.satisfied(75)),
            _summary("B", ScoreResult.dissatisfied(75), ScoreResult.dissatisfied(100)),
        ]
    )

    assert analysis.department_count == 2
    assert analysis.average_satisfaction == 88
    assert analysis.average_dissatisfaction == 88
    assert analysis.most_dissatisfied_department == "B"
    assert analysis.highest_dissatisfaction_rate == 88


def test_overall_is_pooled_not_averaged():
    # Small department with one 100 and a large one with three 60s.
    analysis = assemble(
        [
            _summary("Small", ScoreResult.satisfied(100)),
            _summary("Large", *[ScoreResult.satisfied(60)] * 3),
        ]
    )

    # pooled: 280 / 4 = 70; averaging department percentages would give 80
    assert analysis.average_satisfaction == 70


def test_ties_keep_first_department():
    analysis = assemble(
        [
            _summary("First", ScoreResult.dissatisfied(80)),
            _summary("Second", ScoreResult.dissatisfied(80)),
        ]
    )
    assert analysis.most_dissatisfied_department == "First"


def test_no_dissatisfaction_reports_none():
    analysis = assemble([_summary("A", ScoreResult.satisfied(100)), _summary("B")])

    assert analysis.most_dissatisfied_department == "None"
    assert analysis.highest_dissatisfaction_rate == 0
    assert analysis.average_dissatisfaction == 0


def test_no_departments():
    analysis = assemble([])

    assert analysis.department_count == 0
    assert analysis.average_satisfaction == 0
    assert analysis.most_dissatisfied_department == "None"


def test_analysis_is_immutable():
    analysis = assemble([_summary("A")])

    assert isinstance(analysis.department_summaries, MappingProxyType)
    with pytest.raises(AttributeError):
        analysis.average_satisfaction = 5  # type: ignore[misc]


def test_analysis_exposes_plain_dict_export_only():
    analysis = assemble([_summary("A", ScoreResult.dissatisfied(40))])

    assert not callable(analysis)
    assert analysis.to_dict()["overview"]["most_dissatisfied_department"] == "A"
