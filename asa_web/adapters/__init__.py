from .llm_gemini import GeminiLlmClient, gemini_client_factory

__all__ = [
    "GeminiLlmClient",
    "gemini_client_factory",
]
