from .analysis_client import AnalysisClient
from .analysis_session import AnalysisSession
from .url_normalization import UrlNormalizer, AppStoreUrlNormalizer

__all__ = [
    "AnalysisClient",
    "AnalysisSession",
    "UrlNormalizer",
    "AppStoreUrlNormalizer",
]
