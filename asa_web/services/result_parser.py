from __future__ import annotations

import json
import math
from typing import Any, Optional

from asa_web.domain.errors import MalformedResponseError
from asa_web.domain.models import AnalysisResult, Feature, Review
from asa_web.services.prompt_builder import REQUIRED_FIELDS


def _require_str(obj: dict, key: str, where: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise MalformedResponseError(f"{where}.{key} must be a string, got {type(value).__name__}")
    return value


def _require_list(obj: dict, key: str) -> list:
    value = obj.get(key)
    if not isinstance(value, list):
        raise MalformedResponseError(f"{key} must be an array, got {type(value).__name__}")
    return value


def _require_object(item: Any, where: str) -> dict:
    if not isinstance(item, dict):
        raise MalformedResponseError(f"{where} must be an object, got {type(item).__name__}")
    return item


def _parse_feature(item: Any, where: str) -> Feature:
    item = _require_object(item, where)
    return Feature(
        title=_require_str(item, "title", where),
        description=_require_str(item, "description", where),
    )


def _parse_rating(item: dict, where: str) -> int:
    raw = item.get("rating")
    # bool is an int subclass; "true" is not a rating
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedResponseError(f"{where}.rating must be a number, got {type(raw).__name__}")
    if not math.isfinite(raw):
        raise MalformedResponseError(f"{where}.rating must be finite")
    return int(round(raw))


def _parse_author(item: dict, where: str) -> str:
    # missing or null author is left blank; the review view supplies the default label
    author = item.get("author")
    if author is None:
        return ""
    if not isinstance(author, str):
        raise MalformedResponseError(f"{where}.author must be a string when present, got {type(author).__name__}")
    return author


def _parse_review(item: Any, where: str) -> Review:
    item = _require_object(item, where)
    title: Optional[str] = item.get("title")
    if title is not None and not isinstance(title, str):
        raise MalformedResponseError(f"{where}.title must be a string when present")
    return Review(
        author=_parse_author(item, where),
        rating=_parse_rating(item, where),
        title=title,
        content=_require_str(item, "content", where),
    )


def parse_analysis_result(text: str) -> AnalysisResult:
    """
    JSON parse + shape check of the model's structured output.
    Strings are kept verbatim. Any deviation raises MalformedResponseError.
    """
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedResponseError(f"Response must be a JSON object, got {type(payload).__name__}")

    missing = [k for k in REQUIRED_FIELDS if k not in payload]
    if missing:
        raise MalformedResponseError(f"Response is missing fields: {', '.join(missing)}")

    return AnalysisResult(
        app_name=_require_str(payload, "appName", "$"),
        liked_features=tuple(
            _parse_feature(item, f"likedFeatures[{i}]") for i, item in enumerate(_require_list(payload, "likedFeatures"))
        ),
        disliked_features=tuple(
            _parse_feature(item, f"dislikedFeatures[{i}]")
            for i, item in enumerate(_require_list(payload, "dislikedFeatures"))
        ),
        reviews=tuple(_parse_review(item, f"reviews[{i}]") for i, item in enumerate(_require_list(payload, "reviews"))),
        competitor_prd_markdown=_require_str(payload, "competitorPrdMarkdown", "$"),
        prd_rules_markdown=_require_str(payload, "prdRulesMarkdown", "$"),
    )
