from __future__ import annotations

from typing import Sequence

from google import genai
from google.genai import types

from app.ai.prompts import build_classification_prompt, build_reply_prompt
from app.core.config import GEMINI_MODEL, GOOGLE_GEMINI_API_KEY, HTTP_TIMEOUT_SECONDS


class GeminiProvider:
    name = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: genai.Client | None = None,
    ) -> None:
        self._model = model or GEMINI_MODEL
        self._client = client or genai.Client(
            api_key=api_key or GOOGLE_GEMINI_API_KEY,
            http_options=types.HttpOptions(timeout=int(HTTP_TIMEOUT_SECONDS * 1000)),
        )

    def classify_intent(self, message: str, labels: Sequence[str]) -> str:
        response = self._client.models.generate_content(
            model=self._model,
            contents=build_classification_prompt(message, labels),
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                temperature=0,
            ),
        )
        return response.text or ""

    def generate_reply(self, message: str, history: str | None = None) -> str:
        response = self._client.models.generate_content(
            model=self._model,
            contents=build_reply_prompt(message, history),
        )
        return response.text or ""
