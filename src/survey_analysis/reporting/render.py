"""Render survey reports using Jinja2 templates."""
from __future__ import annotations

import json
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from survey_analysis.models import OverallAnalysis
from survey_analysis.reporting.context import build_report_context

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Markdown output doesn't need HTML escaping; it would mangle quotes in answers.
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_report(analysis: OverallAnalysis) -> str:
    """Render a Markdown report from an :class:`OverallAnalysis`."""

    context = build_report_context(analysis)

    template = _env.get_template("report.md.j2")
    report = template.render(**context.to_dict())
    logger.debug(
        "Report rendered: departments=%d questions=%d len=%d",
        context.department_count,
        len(context.questions),
        len(report),
    )
    return report


def analysis_to_json(analysis: OverallAnalysis, *, indent: int | None = 2) -> str:
    """Serialise *analysis* to JSON; equal analyses give identical strings."""
    return json.dumps(analysis.to_dict(), indent=indent, ensure_ascii=False)
