"""Unit tests for row normalization."""
from __future__ import annotations

import pytest

from survey_analysis.analysis.normalize import normalize_row
from survey_analysis.exceptions import MalformedRowError


def test_pairs_are_ordered_by_question_number():
    row = {
        "Department": "Sales",
        "Question 10": "Anything else?",
        "Answer 10": "No",
        "Question 2": "Rate us",
        "Answer 2": "4",
    }
    response = normalize_row(row)

    assert response.department == "Sales"
    assert [a.index for a in response.answers] == [2, 10]
    assert response.answers[0].question == "Rate us"
    assert response.answers[0].text == "4"


def test_values_are_trimmed():
    row = {"Department": "  HR ", "Question 1": " How? ", "Answer 1": "  Satisfied  "}
    response = normalize_row(row)

    assert response.department == "HR"
    assert response.answers[0].question == "How?"
    assert response.answers[0].text == "Satisfied"


@pytest.mark.parametrize("row", [{}, {"Department": ""}, {"Department": "   "}])
def test_missing_department_defaults_to_unknown(row):
    row = dict(row, **{"Question 1": "Q", "Answer 1": "A"})
    assert normalize_row(row).department == "Unknown"


def test_no_answer_sentinel_and_blanks_are_skipped():
    row = {
        "Department": "IT",
        "Question 1": "Rate us",
        "Answer 1": "No answer",
        "Question 2": "Colours",
        "Answer 2": "Red, Blue",
        "Question 3": "",
        "Answer 3": "orphan answer",
        "Question 4": "Comments",
        "Answer 4": "",
        "Question 5": "Missing answer column",
    }
    response = normalize_row(row)

    assert [(a.index, a.text) for a in response.answers] == [(2, "Red, Blue")]


def test_none_values_are_treated_as_absent():
    row = {"Department": None, "Question 1": "Q", "Answer 1": None, "Question 2": "Q2", "Answer 2": "ok"}
    response = normalize_row(row)

    assert response.department == "Unknown"
    assert [a.index for a in response.answers] == [2]


def test_row_without_usable_pairs_is_malformed():
    with pytest.raises(MalformedRowError):
        normalize_row({"Department": "Ops", "Question 1": "Q", "Answer 1": "No answer"})

    with pytest.raises(MalformedRowError):
        normalize_row({"Department": "Ops", "Comment": "nothing numbered"})


def test_response_is_immutable():
    response = normalize_row({"Question 1": "Q", "Answer 1": "A"})
    with pytest.raises(AttributeError):
        response.department = "Other"  # type: ignore[misc]


def test_question_zero_is_not_a_pair():
    row = {"Question 0": "Zero", "Answer 0": "ignored", "Question 1": "One", "Answer 1": "kept"}
    response = normalize_row(row)

    assert [a.index for a in response.answers] == [1]

    with pytest.raises(MalformedRowError):
        normalize_row({"Question 0": "Zero", "Answer 0": "ignored"})
