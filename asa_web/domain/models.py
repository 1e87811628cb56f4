######## models.py
########

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Feature:
    title: str
    description: str

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description}


@dataclass(frozen=True)
class Review:
    author: str
    rating: int                 # 1-5 intended; clamped on render only
    content: str
    title: Optional[str] = None

    def to_dict(self) -> dict:
        out = {"author": self.author, "rating": self.rating, "content": self.content}
        if self.title is not None:
            out["title"] = self.title
        return out


@dataclass(frozen=True)
class AnalysisResult:
    """
    One complete analysis, created wholesale from a single model response.
    Field names are snake_case here; to_dict() gives the camelCase wire form.
    """
    app_name: str
    liked_features: Tuple[Feature, ...]
    disliked_features: Tuple[Feature, ...]
    reviews: Tuple[Review, ...]
    competitor_prd_markdown: str
    prd_rules_markdown: str

    def to_dict(self) -> dict:
        return {
            "appName": self.app_name,
            "likedFeatures": [f.to_dict() for f in self.liked_features],
            "dislikedFeatures": [f.to_dict() for f in self.disliked_features],
            "reviews": [r.to_dict() for r in self.reviews],
            "competitorPrdMarkdown": self.competitor_prd_markdown,
            "prdRulesMarkdown": self.prd_rules_markdown,
        }
