"""Combine department summaries into the final :class:`OverallAnalysis`."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Optional, Sequence

from survey_analysis.models import DepartmentSummary, OverallAnalysis, ScoreTotals

logger = logging.getLogger(__name__)

NO_DEPARTMENT = "None"


def most_dissatisfied(summaries: Sequence[DepartmentSummary]) -> Optional[DepartmentSummary]:
    """Return the department with the strictly highest dissatisfaction.

    Departments without any dissatisfied contribution are not ranked; ties
    keep the department seen first.
    """

    worst: Optional[DepartmentSummary] = None
    for summary in summaries:
        if summary.scores.dissatisfied_count == 0:
            continue
        if worst is None or summary.dissatisfaction > worst.dissatisfaction:
            worst = summary
    return worst


def assemble(
    summaries: Sequence[DepartmentSummary],
    *,
    response_count: int = 0,
    skipped_row_count: int = 0,
) -> OverallAnalysis:
    """Build the overall view from per-department *summaries*.

    Overall percentages are recomputed from the pooled raw contributions of
    every department rather than averaged across department percentages.
    """

    pooled = sum((s.scores for s in summaries), ScoreTotals())
    worst = most_dissatisfied(summaries)

    analysis = OverallAnalysis(
        department_count=len(summaries),
        average_satisfaction=pooled.satisfaction,
        average_dissatisfaction=pooled.dissatisfaction,
        most_dissatisfied_department=worst.department if worst else NO_DEPARTMENT,
        highest_dissatisfaction_rate=worst.dissatisfaction if worst else 0,
        department_summaries=MappingProxyType({s.department: s for s in summaries}),
        response_count=response_count,
        skipped_row_count=skipped_row_count,
    )
    logger.info(
        "Analysis assembled: departments=%d satisfaction=%d%% dissatisfaction=%d%% worst=%s",
        analysis.department_count,
        analysis.average_satisfaction,
        analysis.average_dissatisfaction,
        analysis.most_dissatisfied_department,
    )
    return analysis
