from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from asa_web.domain.errors import (
    ConfigurationError,
    EmptyResponseError,
    TransportError,
)
from asa_web.domain.models import AnalysisResult
from asa_web.ports.llm import LlmClientFactory
from asa_web.services import prompt_builder
from asa_web.services.result_parser import parse_analysis_result

log = logging.getLogger(__name__)

FALLBACK_KEY_ENVS: Tuple[str, ...] = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


@dataclass
class AnalysisClient:
    """
    Service layer: one analysis = one model call.
    Builds instruction + schema, calls the LLM port, parses and validates the answer.
    All-or-nothing: either a full AnalysisResult or an AnalysisError.
    """
    llm_factory: LlmClientFactory
    api_key_env: str = "API_KEY"
    enable_search: bool = True
    fallback_key_envs: Tuple[str, ...] = field(default=FALLBACK_KEY_ENVS)

    def _api_key(self) -> Optional[str]:
        for name in (self.api_key_env, *self.fallback_key_envs):
            value = (os.getenv(name) or "").strip()
            if value:
                return value
        return None

    def analyze(self, url: str) -> AnalysisResult:
        # Credential is read at call time; nothing is sent without it
        api_key = self._api_key()
        if not api_key:
            raise ConfigurationError(
                f"Environment variable {self.api_key_env} is not set",
                user_message=f"API key not found in environment variables ({self.api_key_env}).",
            )

        try:
            llm = self.llm_factory(api_key)
            text = llm.generate_json(
                system_instruction=prompt_builder.build_system_instruction(),
                prompt=prompt_builder.build_user_prompt(url),
                response_schema=prompt_builder.build_response_schema(),
                enable_search=self.enable_search,
            )
        except Exception as e:
            raise TransportError(f"Model call failed: {e}") from e

        if not text or not text.strip():
            raise EmptyResponseError("Model returned no text")

        result = parse_analysis_result(text)
        log.info(
            "Analysis parsed app=%r liked=%d disliked=%d reviews=%d",
            result.app_name,
            len(result.liked_features),
            len(result.disliked_features),
            len(result.reviews),
        )
        return result
