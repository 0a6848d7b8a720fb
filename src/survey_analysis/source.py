"""CSV row source backed by pandas."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import pandas as pd

from survey_analysis.exceptions import EmptySourceError, SourceUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
ENCODING_FALLBACKS: List[str] = ["utf-8", "utf-8-sig", "latin-1"]


def _encodings(encoding: Optional[str]) -> List[str]:
    preferred = encoding or os.getenv("SURVEY_CSV_ENCODING", DEFAULT_ENCODING)
    return [preferred] + [enc for enc in ENCODING_FALLBACKS if enc != preferred]


def load_frame(path: str | Path, encoding: Optional[str] = None) -> pd.DataFrame:
    """Load *path* as a DataFrame of strings.

    NA detection is disabled so blank cells stay empty strings and answers
    like "None" or "N/A" survive verbatim.
    """

    file_path = Path(path)
    if not file_path.is_file():
        raise SourceUnavailableError(f"CSV file not found at path: {file_path}")

    tried = _encodings(encoding)
    for enc in tried:
        try:
            df = pd.read_csv(file_path, dtype=str, keep_default_na=False, encoding=enc)
            logger.info("Loaded %d rows from %s (%s)", len(df), file_path, enc)
            return df
        except UnicodeDecodeError:
            logger.debug("Decoding %s as %s failed, trying next encoding", file_path, enc)
            continue
        except pd.errors.EmptyDataError as exc:
            raise EmptySourceError(f"CSV file is empty: {file_path}") from exc
        except (OSError, pd.errors.ParserError) as exc:
            raise SourceUnavailableError(f"Failed to read {file_path}: {exc}") from exc

    raise SourceUnavailableError(
        f"Unable to decode {file_path} with any of the tried encodings: {tried}"
    )


def iter_rows(path: str | Path, encoding: Optional[str] = None) -> Iterator[Dict[str, str]]:
    """Yield each CSV row of *path* as a ``{column: value}`` mapping."""
    df = load_frame(path, encoding=encoding)
    for record in df.to_dict(orient="records"):
        yield {str(key): value for key, value in record.items()}
