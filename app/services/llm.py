"""Utilities for interacting with OpenAI."""

from __future__ import annotations

from openai import OpenAI

from app.core.config import settings

SYSTEM_PROMPT = (
    "You are a coffee shop critic in Vilnius, Lithuania. "
    "You write short, honest, practical summaries for people choosing where to drink coffee. "
    "Always answer with a single JSON object and nothing else. "
    "Use null (or an empty list) for anything you do not know; never invent events or menu items."
)

SUMMARY_SCHEMA = """{
  "place_name": string,
  "summary_for_display": string (2-4 sentences, required),
  "chatgpt_rating": string (e.g. "Excellent", "Very good", "Good", "Average"),
  "ongoing_events": string,
  "sentiment_analysis": string (overall sentiment of the reviews),
  "special_features": string,
  "atmosphere": {"vibe": string, "decor_style": string, "good_for_work_study": boolean},
  "coffee_program": {
    "bean_source_quality": string,
    "brewing_methods_available": [string],
    "signature_drinks": [string],
    "milk_alternatives_offered": [string]
  },
  "food_offerings": {"types_available": [string], "specific_popular_items": [string]},
  "key_selling_points": [string],
  "primary_target_audience": [string]
}"""

MAX_OUTPUT_TOKENS = 1000
TEMPERATURE = 0.5


def build_summary_prompt(name: str, address: str, reviews_text: str | None = None) -> str:
    prompt = (
        f'Describe the coffee shop "{name}" located at "{address}" in Vilnius, Lithuania.\n'
        "Return a JSON object with exactly these fields:\n"
        f"{SUMMARY_SCHEMA}\n"
        "The fields place_name, summary_for_display, chatgpt_rating, ongoing_events, "
        "sentiment_analysis and special_features are required."
    )
    if reviews_text:
        prompt += f"\n\nRecent customer reviews:\n{reviews_text}"
    return prompt


class LLMService:
    """Wrapper around the OpenAI chat API for place summaries."""

    def __init__(self, api_key: str | None = None, model: str | None = None, client: OpenAI | None = None) -> None:
        api_key = api_key or settings.openai_api_key
        if client is None and not api_key:
            raise RuntimeError("OPENAI_API_KEY is not configured.")
        self._client = client or OpenAI(api_key=api_key)
        self.model = model or settings.openai_response_model

    def summarize_place(self, name: str, address: str, reviews_text: str | None = None) -> str:
        """Return the raw JSON string produced by the model."""
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_summary_prompt(name, address, reviews_text)},
            ],
            response_format={"type": "json_object"},
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=TEMPERATURE,
        )
        return response.choices[0].message.content or ""


_llm_service_instance: LLMService | None = None


def get_llm_service() -> LLMService:
    """Lazy initialization of LLM service."""
    global _llm_service_instance
    if _llm_service_instance is None:
        _llm_service_instance = LLMService()
    return _llm_service_instance
