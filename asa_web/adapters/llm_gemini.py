from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from google import genai
from google.genai import types

from asa_web.ports.llm import LlmClient

log = logging.getLogger(__name__)


@dataclass
class GeminiLlmClient(LlmClient):
    """
    Adapter: google-genai SDK.
    One generate_content call with Google Search grounding and a JSON response schema.
    """
    api_key: str
    model: str
    timeout_seconds: int

    def _client(self) -> genai.Client:
        return genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=self.timeout_seconds * 1000),
        )

    def generate_json(
        self,
        *,
        system_instruction: str,
        prompt: str,
        response_schema: dict,
        enable_search: bool = True,
    ) -> Optional[str]:
        config_params = {
            "system_instruction": system_instruction,
            "response_mime_type": "application/json",
            "response_schema": response_schema,
        }
        if enable_search:
            config_params["tools"] = [types.Tool(google_search=types.GoogleSearch())]

        log.debug("generate_content model=%s search=%s", self.model, enable_search)
        response = self._client().models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(**config_params),
        )
        return response.text


def gemini_client_factory(model: str, timeout_seconds: int):
    def factory(api_key: str) -> GeminiLlmClient:
        return GeminiLlmClient(api_key=api_key, model=model, timeout_seconds=timeout_seconds)

    return factory
