"""Run one full analysis pass over a sequence of raw rows."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from survey_analysis.analysis.normalize import normalize_row
from survey_analysis.exceptions import (
    EmptySourceError,
    MalformedRowError,
    SourceUnavailableError,
)
from survey_analysis.models import OverallAnalysis
from survey_analysis.reporting.aggregator import DepartmentAggregator
from survey_analysis.reporting.assembler import assemble

logger = logging.getLogger(__name__)


def analyze_rows(rows: Iterable[Mapping[str, Any]]) -> OverallAnalysis:
    """Analyze *rows* (one mapping per respondent) in arrival order.

    Rows without any usable question/answer pair are logged and skipped.
    The function is a pure function of its input: every call starts from a
    fresh aggregator and nothing partial is returned when the source fails.

    Raises
    ------
    EmptySourceError
        If *rows* yields no rows.
    SourceUnavailableError
        If reading from *rows* fails with an I/O error.
    """

    aggregator = DepartmentAggregator()
    row_count = 0
    skipped = 0

    try:
        for row_count, row in enumerate(rows, start=1):
            try:
                response = normalize_row(row)
            except MalformedRowError as exc:
                skipped += 1
                logger.warning("Skipping row %d: %s", row_count, exc)
                continue
            aggregator.add(response)
    except OSError as exc:
        raise SourceUnavailableError(
            f"Row source failed after {row_count} rows: {exc}"
        ) from exc

    if row_count == 0:
        raise EmptySourceError("Row source yielded no rows.")

    logger.debug(
        "Processed %d rows (%d skipped) across %d departments",
        row_count,
        skipped,
        aggregator.department_count,
    )
    return assemble(
        aggregator.finalize(),
        response_count=row_count - skipped,
        skipped_row_count=skipped,
    )
