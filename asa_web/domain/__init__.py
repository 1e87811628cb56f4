from .errors import (
    AnalysisError,
    ConfigurationError,
    EmptyResponseError,
    MalformedResponseError,
    TransportError,
)
from .models import AnalysisResult, Feature, Review
from .state import ActiveTab, AnalysisState, PageState

__all__ = [
    "AnalysisError",
    "ConfigurationError",
    "EmptyResponseError",
    "MalformedResponseError",
    "TransportError",
    "AnalysisResult",
    "Feature",
    "Review",
    "ActiveTab",
    "AnalysisState",
    "PageState",
]
