"""Tests for AI summary parsing and storage."""

import json
from unittest.mock import MagicMock

import pytest

from app.models.place import CoffeePlace
from app.services.enrichment import (
    PLACEHOLDER_SUMMARY,
    PlaceNotFoundError,
    enrich_place,
    parse_ai_summary,
    reviews_context,
)
from app.services.llm import LLMService, build_summary_prompt

VALID_SUMMARY = {
    "place_name": "Vero Cafe",
    "summary_for_display": "A busy chain cafe on the main avenue with reliable flat whites.",
    "chatgpt_rating": "Good",
    "ongoing_events": "None known.",
    "sentiment_analysis": "Mostly positive.",
    "special_features": "Large terrace.",
    "atmosphere": {"vibe": "busy", "decor_style": "modern", "good_for_work_study": True},
    "coffee_program": {"signature_drinks": ["Flat white"]},
    "key_selling_points": ["Central location"],
}


class FakeLLM:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def summarize_place(self, name, address, reviews_text=None):
        self.calls.append((name, address, reviews_text))
        return self.response


def test_valid_summary_is_parsed():
    assert parse_ai_summary(json.dumps(VALID_SUMMARY), "Vero Cafe") == VALID_SUMMARY


def test_place_name_is_filled_from_row():
    data = dict(VALID_SUMMARY)
    del data["place_name"]
    assert parse_ai_summary(json.dumps(data), "Vero Cafe")["place_name"] == "Vero Cafe"


def test_model_output_is_kept_as_returned():
    data = dict(VALID_SUMMARY, opening_note="Closed on Mondays")
    summary = parse_ai_summary(json.dumps(data), "Vero Cafe")
    assert summary["opening_note"] == "Closed on Mondays"
    assert "food_offerings" not in summary
    assert "error" not in summary


@pytest.mark.parametrize(
    "raw,error_start",
    [
        ("this is not json", "Failed to parse AI response as JSON"),
        ("[1, 2, 3]", "AI response is not a JSON object"),
        (json.dumps({"chatgpt_rating": "Good"}), "AI response failed validation"),
        (json.dumps({"summary_for_display": "Nice."}), "AI response is missing required fields"),
    ],
)
def test_bad_responses_fall_back(raw, error_start):
    summary = parse_ai_summary(raw, "Vero Cafe")
    assert summary["error"].startswith(error_start)
    assert summary["summary_for_display"] == PLACEHOLDER_SUMMARY
    assert summary["place_name"] == "Vero Cafe"


def test_reviews_context_skips_empty_text():
    reviews = [{"text": "Great"}, {"text": ""}, {"author_name": "x"}, {"text": "Slow"}]
    assert reviews_context(reviews) == "Great\nSlow"
    assert reviews_context(None) == ""


def test_enrich_place_stores_summary(db, make_place):
    make_place("place-1", reviews=[{"author_name": "Ona", "rating": 5, "text": "Great", "time": 1}])
    llm = FakeLLM(json.dumps(VALID_SUMMARY))

    summary = enrich_place(db, "place-1", llm)

    assert llm.calls == [("Vero Cafe", "Gedimino pr. 10, Vilnius", "Great")]
    place = db.get(CoffeePlace, "place-1")
    assert place.ai_summary == summary == VALID_SUMMARY
    assert place.chatgpt_rating == "Good"


def test_enrich_place_overwrites_previous_summary(db, make_place):
    make_place("place-1", ai_summary={"summary_for_display": "Old."}, chatgpt_rating="Average")

    enrich_place(db, "place-1", FakeLLM(json.dumps(VALID_SUMMARY)))

    place = db.get(CoffeePlace, "place-1")
    assert place.ai_summary["summary_for_display"] == VALID_SUMMARY["summary_for_display"]
    assert place.chatgpt_rating == "Good"


def test_fallback_summary_is_not_stored(db, make_place):
    make_place("place-1", ai_summary={"summary_for_display": "Old."})

    summary = enrich_place(db, "place-1", FakeLLM("oops"))

    assert summary["error"]
    assert db.get(CoffeePlace, "place-1").ai_summary == {"summary_for_display": "Old."}


def test_unknown_place_raises(db):
    llm = FakeLLM(json.dumps(VALID_SUMMARY))
    with pytest.raises(PlaceNotFoundError):
        enrich_place(db, "missing", llm)
    assert llm.calls == []


def test_llm_service_requests_json_object():
    client = MagicMock()
    client.chat.completions.create.return_value.choices = [MagicMock(message=MagicMock(content="{}"))]
    service = LLMService(model="gpt-4o-mini", client=client)

    assert service.summarize_place("Vero", "Gedimino pr. 10") == "{}"
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][0]["role"] == "system"


def test_llm_service_requires_key(monkeypatch):
    monkeypatch.setattr("app.services.llm.settings.openai_api_key", None)
    with pytest.raises(RuntimeError):
        LLMService()


def test_prompt_includes_reviews_only_when_present():
    assert "Recent customer reviews" not in build_summary_prompt("Vero", "Gedimino pr. 10")
    assert "Great coffee" in build_summary_prompt("Vero", "Gedimino pr. 10", "Great coffee")
