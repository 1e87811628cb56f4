from __future__ import annotations

import json

import pytest

from asa_web.domain.errors import MalformedResponseError
from asa_web.domain.models import Feature, Review
from asa_web.services.result_parser import parse_analysis_result


def test_fields_are_kept_verbatim(payload, payload_text):
    result = parse_analysis_result(payload_text)

    assert result.app_name == payload["appName"]
    assert result.liked_features[0] == Feature(
        title="Clean timer", description="Users love the  minimal   timer screen."
    )
    assert result.liked_features[1].description == "Home screen widgets are praised.\nEspecially the small one."
    assert result.competitor_prd_markdown == payload["competitorPrdMarkdown"]
    assert result.prd_rules_markdown == payload["prdRulesMarkdown"]
    assert result.to_dict() == payload


def test_review_title_is_optional(result):
    assert result.reviews[0] == Review(author="jane_d", rating=5, title="Finally!", content="Best part is the widget.")
    assert result.reviews[1].title is None
    assert result.reviews[1].author == ""


def test_float_rating_becomes_int(payload_factory):
    payload = payload_factory(reviews=[{"author": "a", "rating": 4.0, "content": "ok"}])
    result = parse_analysis_result(json.dumps(payload))
    assert result.reviews[0].rating == 4
    assert isinstance(result.reviews[0].rating, int)


def test_out_of_range_rating_is_not_clamped_at_parse(payload_factory):
    payload = payload_factory(reviews=[{"author": "a", "rating": 9, "content": "ok"}])
    assert parse_analysis_result(json.dumps(payload)).reviews[0].rating == 9


def test_empty_arrays_are_valid(payload_factory):
    payload = payload_factory(likedFeatures=[], dislikedFeatures=[], reviews=[])
    result = parse_analysis_result(json.dumps(payload))
    assert result.liked_features == ()
    assert result.reviews == ()


@pytest.mark.parametrize("text", ["", "not json", "{\"appName\": ", "```json\n{}\n```"])
def test_invalid_json(text):
    with pytest.raises(MalformedResponseError, match="not valid JSON"):
        parse_analysis_result(text)


def test_top_level_must_be_object():
    with pytest.raises(MalformedResponseError, match="JSON object"):
        parse_analysis_result("[1, 2]")


@pytest.mark.parametrize("field", ["appName", "reviews", "prdRulesMarkdown", "competitorPrdMarkdown"])
def test_missing_field(payload, field):
    del payload[field]
    with pytest.raises(MalformedResponseError, match=field):
        parse_analysis_result(json.dumps(payload))


@pytest.mark.parametrize(
    "overrides, where",
    [
        ({"appName": 12}, "appName"),
        ({"likedFeatures": "lots"}, "likedFeatures"),
        ({"likedFeatures": ["x"]}, r"likedFeatures\[0\]"),
        ({"dislikedFeatures": [{"title": "t"}]}, r"dislikedFeatures\[0\]\.description"),
        ({"reviews": [{"author": "a", "rating": "5", "content": "c"}]}, r"reviews\[0\]\.rating"),
        ({"reviews": [{"author": "a", "rating": True, "content": "c"}]}, r"reviews\[0\]\.rating"),
        ({"reviews": [{"author": "a", "rating": 3, "content": "c", "title": 7}]}, r"reviews\[0\]\.title"),
        ({"reviews": [{"author": 42, "rating": 3, "content": "c"}]}, r"reviews\[0\]\.author"),
        ({"prdRulesMarkdown": None}, "prdRulesMarkdown"),
    ],
)
def test_wrong_shape(payload_factory, overrides, where):
    with pytest.raises(MalformedResponseError, match=where):
        parse_analysis_result(json.dumps(payload_factory(**overrides)))


@pytest.mark.parametrize(
    "review",
    [
        {"rating": 4, "content": "no author key"},
        {"author": None, "rating": 4, "content": "null author"},
    ],
)
def test_missing_or_null_author_is_blank(payload_factory, review):
    result = parse_analysis_result(json.dumps(payload_factory(reviews=[review])))
    assert result.reviews[0].author == ""
    assert result.reviews[0].content == review["content"]


def test_string_author_is_verbatim(payload_factory):
    review = {"author": "  Sam  ", "rating": 4, "content": "c"}
    assert parse_analysis_result(json.dumps(payload_factory(reviews=[review]))).reviews[0].author == "  Sam  "
