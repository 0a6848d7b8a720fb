"""Configuration for the reporting pipeline.

Values are read from the environment on every call so that settings loaded
from a ``.env`` file by the CLI take effect after the package is imported.
"""
from __future__ import annotations

import os


def report_title() -> str:
    """Title printed at the top of the Markdown report."""
    return os.getenv("REPORT_TITLE", "Survey Analysis Report")


def max_text_samples() -> int:
    """Free-text answers listed per department before "and N more"."""
    return int(os.getenv("REPORT_MAX_TEXT_SAMPLES", "3"))


def report_version() -> str:
    """Report format version stamped into the footer."""
    return os.getenv("REPORT_VERSION", "0.1")
