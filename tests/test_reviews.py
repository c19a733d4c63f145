"""Tests for review normalisation and merging."""

import pytest

from app.services.reviews import (
    InvalidReviewError,
    merge_reviews,
    normalize_review,
    normalize_reviews,
)


def _review(author="A", time=1, text="t", rating=5):
    return {"author_name": author, "rating": rating, "text": text, "time": time}


def test_merge_with_itself_is_idempotent():
    reviews = [_review("A", 1), _review("B", 2)]
    assert merge_reviews(reviews, reviews) == reviews


def test_single_review_merge():
    r = _review()
    assert merge_reviews([r], [r]) == [r]


def test_fetched_review_wins_on_same_key():
    merged = merge_reviews([_review("A", 1, "old")], [_review("A", 1, "new")])
    assert len(merged) == 1
    assert merged[0]["text"] == "new"


def test_union_keeps_insertion_order():
    existing = [_review("A", 1), _review("B", 2)]
    fetched = [_review("C", 3), _review("A", 1, "edited")]
    merged = merge_reviews(existing, fetched)
    assert [(r["author_name"], r["text"]) for r in merged] == [("A", "edited"), ("B", "t"), ("C", "t")]


def test_same_author_different_time_are_distinct():
    merged = merge_reviews([_review("A", 1)], [_review("A", 2)])
    assert len(merged) == 2


def test_merge_handles_missing_lists():
    assert merge_reviews(None, None) == []
    assert merge_reviews(None, [_review()]) == [_review()]


def test_numeric_string_time_is_parsed():
    review = normalize_review({"author_name": "A", "rating": 4, "text": "ok", "time": "1700000000"})
    assert review["time"] == 1700000000


def test_non_numeric_time_is_rejected():
    with pytest.raises(InvalidReviewError):
        normalize_review({"author_name": "A", "time": "yesterday"})


def test_missing_author_is_rejected():
    with pytest.raises(InvalidReviewError):
        normalize_review({"time": 1})


def test_normalize_reviews_drops_invalid_entries():
    raw = [
        {"author_name": "A", "rating": 5, "text": "good", "time": 1},
        {"author_name": "B", "time": "not-a-number"},
    ]
    assert normalize_reviews(raw) == [_review("A", 1, "good", 5)]


def test_aspects_are_kept():
    aspects = [{"type": "coffee", "rating": 3}]
    review = normalize_review({"author_name": "A", "time": 1, "aspects": aspects})
    assert review["aspects"] == aspects


@pytest.mark.parametrize("time", ["--5", "²", "1²", "١٢٣", "", True, 1.5, None])
def test_malformed_times_are_rejected(time):
    with pytest.raises(InvalidReviewError):
        normalize_review({"author_name": "A", "time": time})


def test_negative_time_string_is_parsed():
    assert normalize_review({"author_name": "A", "time": " -5 "})["time"] == -5


def test_one_malformed_time_drops_only_that_review():
    raw = [{"author_name": "A", "time": 1}, {"author_name": "B", "time": "--5"}]
    assert [r["author_name"] for r in normalize_reviews(raw)] == ["A"]
