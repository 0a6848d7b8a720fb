"""Survey analysis engine: classify, score and aggregate survey responses."""

from survey_analysis.pipeline import analyze_rows

__all__ = ["analyze_rows"]

__version__ = "0.1.0"
