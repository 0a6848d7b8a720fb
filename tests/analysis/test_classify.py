"""Unit tests for question type classification."""
from __future__ import annotations

import pytest

from survey_analysis.analysis.classify import classify
from survey_analysis.models import QuestionType


@pytest.mark.parametrize(
    "samples, expected",
    [
        (["1", "3", "5"], QuestionType.STAR_RATING),
        (["Red, Blue", "Green"], QuestionType.MULTI_SELECT),
        (["Satisfied", "Neutral"], QuestionType.SINGLE_CHOICE),
        (["It was fine", "Great service"], QuestionType.TEXT),
    ],
)
def test_reference_examples(samples, expected):
    assert classify(samples) == expected


def test_star_pattern_is_case_insensitive():
    assert classify(["4 Stars", "great"]) is QuestionType.STAR_RATING
    assert classify(["1 STAR"]) is QuestionType.STAR_RATING


def test_bare_digits_must_all_be_in_range():
    # "7" is not a 1-5 rating and nothing says "stars"
    assert classify(["1", "7"]) is QuestionType.TEXT


def test_star_rating_takes_precedence_over_commas():
    assert classify(["3 stars, maybe 4"]) is QuestionType.STAR_RATING


def test_multi_select_takes_precedence_over_single_choice():
    assert classify(["Satisfied", "Satisfied, Neutral"]) is QuestionType.MULTI_SELECT


def test_single_choice_requires_every_sample_on_scale():
    assert classify(["Satisfied", "Meh"]) is QuestionType.TEXT


def test_empty_samples_classify_as_text():
    assert classify([]) is QuestionType.TEXT
    assert classify(["", "   "]) is QuestionType.TEXT


def test_type_values_are_the_four_tags():
    assert {t.value for t in QuestionType} == {
        "StarRating",
        "SingleChoice",
        "MultiSelect",
        "Text",
    }
