from __future__ import annotations

from typing import Any, Protocol

import google.generativeai as genai

from app.errors import GenerationFailure, format_exc


class GenerationClient(Protocol):
    async def generate_json(self, prompt: str) -> str: ...


class GeminiClient:
    """
    Thin wrapper around `google.generativeai` for JSON-mode generation.

    The API key is configured once here, at construction time.
    """

    def __init__(self, api_key: str, model_name: str = "gemini-1.5-flash", *, debug: bool = False):
        if not api_key:
            raise RuntimeError("api_key is required to build a Gemini client")
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.debug = debug
        self._model = genai.GenerativeModel(
            model_name,
            generation_config={"response_mime_type": "application/json"},
        )

    async def generate_json(self, prompt: str) -> str:
        try:
            resp: Any = await self._model.generate_content_async(prompt)
            # `.text` raises ValueError when the candidate was blocked/empty.
            text = (resp.text or "").strip()
        except Exception as e:
            raise GenerationFailure(f"Gemini call failed ({format_exc(e)})") from e

        if self.debug:
            print(f"[GEMINI] model={self.model_name} raw_output={text[:500]!r}")
        if not text:
            raise GenerationFailure("No text content found in model response")
        return text
