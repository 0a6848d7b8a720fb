"""Project-wide custom exception types."""


class SurveyAnalysisError(RuntimeError):
    """Base class for every error raised by the analysis engine."""


class SourceUnavailableError(SurveyAnalysisError):
    """Raised when the row source cannot be opened or read."""


class EmptySourceError(SurveyAnalysisError):
    """Raised when the row source yields no rows at all."""


class MalformedRowError(SurveyAnalysisError):
    """Raised when a row carries no usable question/answer pair.

    The pipeline logs and skips such rows; it is never fatal for a run.
    """


class ScoringOverflowError(SurveyAnalysisError):
    """Raised when a computed score falls outside ``[0, 100]``."""
