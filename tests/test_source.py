"""Tests for the pandas-backed CSV row source."""
from __future__ import annotations

import pytest

from survey_analysis.exceptions import EmptySourceError, SourceUnavailableError
from survey_analysis.pipeline import analyze_rows
from survey_analysis.source import iter_rows


def _write(tmp_path, text: str, encoding: str = "utf-8"):
    path = tmp_path / "survey.csv"
    path.write_bytes(text.encode(encoding))
    return path


def test_rows_are_strings_and_blanks_stay_blank(tmp_path):
    path = _write(
        tmp_path,
        "Department,Question 1,Answer 1,Question 2,Answer 2\n"
        "Sales,Rate us,4,Comments,\n"
        ",Rate us,N/A,Comments,None\n",
    )
    rows = list(iter_rows(path))

    assert rows[0] == {
        "Department": "Sales",
        "Question 1": "Rate us",
        "Answer 1": "4",
        "Question 2": "Comments",
        "Answer 2": "",
    }
    assert rows[1]["Answer 1"] == "N/A"
    assert rows[1]["Answer 2"] == "None"


def test_quoted_multi_select_survives(tmp_path):
    path = _write(tmp_path, 'Department,Question 1,Answer 1\nIT,Tools,"Slack, Email"\n')
    analysis = analyze_rows(iter_rows(path))

    tally = analysis.department_summaries["IT"].question_tallies[1]
    assert dict(tally.option_counts) == {"Slack": 1, "Email": 1}


def test_latin1_fallback(tmp_path):
    path = _write(
        tmp_path,
        "Department,Question 1,Answer 1\nFinanzen,Kommentar,Sehr gründlich\n",
        encoding="latin-1",
    )
    rows = list(iter_rows(path))

    assert rows[0]["Answer 1"] == "Sehr gründlich"


def test_missing_file(tmp_path):
    with pytest.raises(SourceUnavailableError):
        list(iter_rows(tmp_path / "nope.csv"))


def test_empty_file(tmp_path):
    path = _write(tmp_path, "")
    with pytest.raises(EmptySourceError):
        list(iter_rows(path))


def test_header_only_file_is_empty_source(tmp_path):
    path = _write(tmp_path, "Department,Question 1,Answer 1\n")
    with pytest.raises(EmptySourceError):
        analyze_rows(iter_rows(path))
