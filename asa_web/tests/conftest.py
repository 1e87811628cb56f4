from __future__ import annotations

import json

import pytest

from asa_web.services.result_parser import parse_analysis_result


def make_payload(**overrides) -> dict:
    payload = {
        "appName": "Focus Timer Pro",
        "likedFeatures": [
            {"title": "Clean timer", "description": "Users love the  minimal   timer screen."},
            {"title": "Widgets", "description": "Home screen widgets are praised.\nEspecially the small one."},
        ],
        "dislikedFeatures": [
            {"title": "Sync bugs", "description": "iCloud sync loses sessions."},
        ],
        "reviews": [
            {"author": "jane_d", "rating": 5, "title": "Finally!", "content": "Best part is the widget."},
            {"author": "", "rating": 2, "content": "Crashes when I open stats."},
        ],
        "competitorPrdMarkdown": "# Focus Timer Pro — Product Requirements Document\n\n## 1. Overview\n- **Goal**: calm focus",
        "prdRulesMarkdown": "## Rules\n1. Fix sync because 40 reviews mention it\n> evidence based",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def payload() -> dict:
    return make_payload()


@pytest.fixture
def payload_text(payload) -> str:
    return json.dumps(payload)


@pytest.fixture
def result(payload_text):
    return parse_analysis_result(payload_text)


@pytest.fixture
def payload_factory():
    return make_payload
