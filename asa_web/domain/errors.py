from __future__ import annotations


class AnalysisError(RuntimeError):
    """
    Base for every failure of one analysis.
    `user_message` is what the page shows; str(exc) may carry diagnostics for the log.
    """
    default_message = "Failed to analyze the application. Please ensure the URL is valid and try again."

    def __init__(self, detail: str = "", *, user_message: str | None = None):
        super().__init__(detail or self.default_message)
        self.user_message = user_message or self.default_message


class ConfigurationError(AnalysisError):
    default_message = "API key not found in environment variables."


class TransportError(AnalysisError):
    default_message = "Failed to reach the analysis service. Please try again."


class EmptyResponseError(AnalysisError):
    default_message = "No response received from the analysis service."


class MalformedResponseError(AnalysisError):
    default_message = "The analysis service returned a response that could not be read. Please try again."
