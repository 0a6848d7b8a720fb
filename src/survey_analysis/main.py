"""Command line entry point for the survey analysis engine.

Reads a CSV export, runs one analysis pass and writes either a Markdown
report or the raw analysis as JSON to stdout or to ``--output``.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from survey_analysis.exceptions import SurveyAnalysisError
from survey_analysis.pipeline import analyze_rows
from survey_analysis.reporting.render import analysis_to_json, render_report
from survey_analysis.source import iter_rows

logger = logging.getLogger("survey_analysis")


def setup_logging(log_level: str) -> None:
    """Configure root logging; unknown level names fall back to INFO."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=level,
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="survey-analysis",
        description="Department satisfaction analysis for survey CSV exports.",
    )
    parser.add_argument("input_file", help="CSV file with Department / Question N / Answer N columns")
    parser.add_argument("-o", "--output", help="Write the result here instead of stdout")
    parser.add_argument(
        "-f",
        "--format",
        choices=("markdown", "json"),
        default="markdown",
        help="Output format (default: markdown)",
    )
    parser.add_argument("--encoding", help="CSV encoding (default: SURVEY_CSV_ENCODING or utf-8)")
    parser.add_argument(
        "--log-level",
        default=os.getenv("SURVEY_LOG_LEVEL", "INFO"),
        help="Logging level (default: SURVEY_LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit code."""

    # Load environment variables from a .env file in the working directory;
    # settings are read lazily so this still applies to imported modules.
    load_dotenv(find_dotenv(usecwd=True))

    args = create_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        analysis = analyze_rows(iter_rows(args.input_file, encoding=args.encoding))
    except SurveyAnalysisError as exc:
        logger.error("Analysis failed: %s", exc)
        return 1

    if args.format == "json":
        output = analysis_to_json(analysis)
    else:
        output = render_report(analysis)

    if args.output:
        try:
            Path(args.output).write_text(output, encoding="utf-8")
        except OSError as exc:
            logger.error("Could not write %s: %s", args.output, exc)
            return 1
        logger.info("Wrote %s report to %s", args.format, args.output)
    else:
        sys.stdout.write(output)
        if not output.endswith("\n"):
            sys.stdout.write("\n")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
