"""Context dataclasses for rendering survey reports.

This module defines `ReportContext`, a typed container that holds all
values expected by the master Jinja2 template located in
`survey_analysis/reporting/templates/report.md.j2`.

The presentation policy for each question type lives here, not in the
template and not in the analysis engine:

    • StarRating   – options 1..5 in order, zero counts included.
    • SingleChoice – the fixed five-point scale, then any other answers.
    • MultiSelect  – options sorted by count, most frequent first.
    • Text         – a short sample of answers plus a remainder count.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime as _dt
from datetime import timezone as _tz
from typing import Any, Dict, List, Mapping

from survey_analysis.analysis.classify import SATISFACTION_SCALE
from survey_analysis.analysis.scoring import MAX_STARS, parse_stars
from survey_analysis.models import OverallAnalysis, QuestionTally, QuestionType
from survey_analysis.reporting import config

__all__ = [
    "OptionCount",
    "DepartmentBreakdown",
    "QuestionSection",
    "DepartmentLine",
    "ReportContext",
    "build_report_context",
]


@dataclass(slots=True)
class OptionCount:
    label: str
    count: int


@dataclass(slots=True)
class DepartmentBreakdown:
    """Option list shown for one department under one question."""

    department: str
    type: str
    options: List[OptionCount] = field(default_factory=list)
    remaining: int = 0


@dataclass(slots=True)
class QuestionSection:
    question: str
    type: str
    departments: List[DepartmentBreakdown] = field(default_factory=list)


@dataclass(slots=True)
class DepartmentLine:
    department: str
    satisfaction: int
    dissatisfaction: int
    response_count: int


@dataclass(slots=True)
class ReportContext:
    """Container with all fields used by the report template."""

    # Header & meta
    title: str
    date: str  # ISO-8601 date string (UTC)

    # Overview
    department_count: int
    average_satisfaction: int
    average_dissatisfaction: int
    most_dissatisfied_department: str
    highest_dissatisfaction_rate: int
    response_count: int
    skipped_row_count: int

    # Sections
    key_findings: List[str] = field(default_factory=list)
    departments: List[DepartmentLine] = field(default_factory=list)
    questions: List[QuestionSection] = field(default_factory=list)

    version: str = "1"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – simple helper
        """Return a *plain* ``dict`` (recursively) for Jinja rendering."""
        return asdict(self)

    # Alias for convenience (e.g. template kwargs)
    __call__ = to_dict


# ---------------------------------------------------------------------------
# Presentation policies
# ---------------------------------------------------------------------------
def _star_options(counts: Mapping[str, int]) -> List[OptionCount]:
    per_star = {stars: 0 for stars in range(1, MAX_STARS + 1)}
    for label, count in counts.items():
        stars = parse_stars(label)
        if stars in per_star:
            per_star[stars] += count
    return [
        OptionCount(label=f"{stars} star" + ("s" if stars > 1 else ""), count=count)
        for stars, count in per_star.items()
    ]


def _scale_options(counts: Mapping[str, int]) -> List[OptionCount]:
    options = [OptionCount(label, counts.get(label, 0)) for label in SATISFACTION_SCALE]
    options.extend(
        OptionCount(label, count)
        for label, count in counts.items()
        if label not in SATISFACTION_SCALE
    )
    return options


def _ranked_options(counts: Mapping[str, int]) -> List[OptionCount]:
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [OptionCount(label, count) for label, count in ranked]


def _breakdown(department: str, tally: QuestionTally, max_samples: int) -> DepartmentBreakdown:
    counts = tally.option_counts
    if tally.type is QuestionType.STAR_RATING:
        return DepartmentBreakdown(department, tally.type.value, _star_options(counts))
    if tally.type is QuestionType.SINGLE_CHOICE:
        return DepartmentBreakdown(department, tally.type.value, _scale_options(counts))
    if tally.type is QuestionType.MULTI_SELECT:
        return DepartmentBreakdown(department, tally.type.value, _ranked_options(counts))

    samples = [OptionCount(label, count) for label, count in counts.items()]
    return DepartmentBreakdown(
        department,
        tally.type.value,
        samples[:max_samples],
        remaining=max(0, len(samples) - max_samples),
    )


def _key_findings(analysis: OverallAnalysis) -> List[str]:
    if not analysis.department_summaries:
        return []
    findings = [
        f"Overall satisfaction across departments is {analysis.average_satisfaction}%."
    ]
    if analysis.most_dissatisfied_department != "None":
        findings.append(
            f"{analysis.most_dissatisfied_department} department shows areas for "
            f"improvement ({analysis.highest_dissatisfaction_rate}% dissatisfaction)."
        )
    return findings


# ---------------------------------------------------------------------------
# Conversion helper
# ---------------------------------------------------------------------------
def build_report_context(
    analysis: OverallAnalysis, *, max_samples: int | None = None
) -> ReportContext:
    """Convert an :class:`OverallAnalysis` into a :class:`ReportContext`.

    Questions are grouped by their text across departments, in the order
    they were first seen. The function is *pure* apart from the report date.
    """

    limit = config.max_text_samples() if max_samples is None else max_samples

    departments: List[DepartmentLine] = []
    sections: Dict[str, QuestionSection] = {}
    for name, summary in analysis.department_summaries.items():
        departments.append(
            DepartmentLine(
                department=name,
                satisfaction=summary.satisfaction,
                dissatisfaction=summary.dissatisfaction,
                response_count=summary.response_count,
            )
        )
        for tally in summary.question_tallies.values():
            section = sections.get(tally.question)
            if section is None:
                section = QuestionSection(question=tally.question, type=tally.type.value)
                sections[tally.question] = section
            section.departments.append(_breakdown(name, tally, limit))

    return ReportContext(
        title=config.report_title(),
        date=_dt.now(tz=_tz.utc).strftime("%Y-%m-%d"),
        department_count=analysis.department_count,
        average_satisfaction=analysis.average_satisfaction,
        average_dissatisfaction=analysis.average_dissatisfaction,
        most_dissatisfied_department=analysis.most_dissatisfied_department,
        highest_dissatisfaction_rate=analysis.highest_dissatisfaction_rate,
        response_count=analysis.response_count,
        skipped_row_count=analysis.skipped_row_count,
        key_findings=_key_findings(analysis),
        departments=departments,
        questions=list(sections.values()),
        version=config.report_version(),
    )
