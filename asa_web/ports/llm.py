from __future__ import annotations

from typing import Callable, Optional


class LlmClient:
    """Port: one structured-output generation call. Implemented by adapters/llm_gemini.py."""

    def generate_json(
        self,
        *,
        system_instruction: str,
        prompt: str,
        response_schema: dict,
        enable_search: bool = True,
    ) -> Optional[str]:
        """Returns the raw response text (expected to be a JSON document), or None/"" when empty."""
        raise NotImplementedError


# api_key -> LlmClient; lets the service defer client construction until the key is known
LlmClientFactory = Callable[[str], LlmClient]
