from .llm import LlmClient, LlmClientFactory

__all__ = [
    "LlmClient",
    "LlmClientFactory",
]
