from __future__ import annotations

import json

import pytest

from asa_web.app_factory import create_app
from asa_web.config import AppSettings


# -----------------------------
# Test doubles
# -----------------------------
class FakeLlm:
    def __init__(self, text):
        self.text = text
        self.calls = 0

    def generate_json(self, **kwargs):
        self.calls += 1
        return self.text


# -----------------------------
# Helpers
# -----------------------------
def make_settings(**overrides) -> AppSettings:
    values = dict(
        gemini_model="test-model",
        api_key_env="API_KEY",
        timeout_seconds=5,
        enable_search=True,
        default_scheme="https",
        allowed_hosts=frozenset({"apps.apple.com"}),
        copy_feedback_ms=2000,
        flask_host="127.0.0.1",
        flask_port=5000,
        flask_debug=False,
        log_level="INFO",
    )
    values.update(overrides)
    return AppSettings(**values)


@pytest.fixture
def llm(payload_text):
    return FakeLlm(payload_text)


@pytest.fixture
def client(llm, monkeypatch):
    for name in ("API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("API_KEY", "test-key")
    app = create_app(make_settings(), llm_factory=lambda key: llm)
    app.config["TESTING"] = True
    return app.test_client()


def analyze(client, url="https://apps.apple.com/us/app/focus/id1"):
    return client.post("/analyze", data={"url": url})


# -----------------------------
# Tests
# -----------------------------
def test_index_starts_empty(client):
    resp = client.get("/")
    html = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "Waiting to analyze your next target app." in html
    assert 'type="url"' in html
    assert "required" in html


def test_analyze_redirects_and_renders_liked_tab(client, llm):
    resp = analyze(client)
    assert resp.status_code == 303
    assert llm.calls == 1

    html = client.get("/").get_data(as_text=True)
    assert "Analysis Results for:" in html
    assert "Focus Timer Pro" in html
    assert "Clean timer" in html
    assert "tab-liked active" in html


def test_tab_switch_does_not_call_model(client, llm):
    analyze(client)
    html = client.get("/?tab=reviews").get_data(as_text=True)

    assert "Evidence: 2 Key Reviews Analyzed" in html
    assert "Anonymous" in html
    assert llm.calls == 1


def test_document_tabs_render_blocks_and_copy_button(client):
    analyze(client)
    html = client.get("/?tab=blueprint").get_data(as_text=True)

    assert '<h1 class="md-h1">' in html
    assert "<strong>Goal</strong>" in html
    assert 'data-feedback-ms="2000"' in html
    assert "Copy PRD" in html

    rules = client.get("/?tab=rules").get_data(as_text=True)
    assert '<li class="md-ol">' in rules
    assert "<blockquote>" in rules


def test_blank_url_is_rejected_without_touching_state(client, llm):
    resp = client.post("/analyze", data={"url": "  "})
    assert resp.status_code == 400
    assert "Please enter an app store URL." in resp.get_data(as_text=True)
    assert llm.calls == 0
    assert client.get("/api/state").get_json()["phase"] == "idle"


def test_unsupported_host_is_rejected(client, llm):
    resp = client.post("/analyze", data={"url": "https://example.com/app"})
    assert resp.status_code == 400
    assert llm.calls == 0


def test_missing_key_shows_configuration_error(client, llm, monkeypatch):
    monkeypatch.delenv("API_KEY")
    analyze(client)

    state = client.get("/api/state").get_json()
    assert state["phase"] == "failed"
    assert state["result"] is None
    assert "API_KEY" in state["error"]
    assert llm.calls == 0

    html = client.get("/").get_data(as_text=True)
    assert 'class="error-banner"' in html


def test_failure_after_success_discards_result(client, llm):
    analyze(client)
    llm.text = "{broken"
    analyze(client)

    state = client.get("/api/state").get_json()
    assert state["phase"] == "failed"
    assert state["result"] is None
    assert "Analysis Results for:" not in client.get("/").get_data(as_text=True)


def test_api_state_returns_wire_form(client, payload):
    analyze(client)
    state = client.get("/api/state").get_json()

    assert state["phase"] == "ready"
    assert state["isLoading"] is False
    assert state["error"] is None
    assert state["activeTab"] == "liked"
    assert state["result"] == json.loads(json.dumps(payload))


def test_download_document(client, payload):
    assert client.get("/documents/blueprint.md").status_code == 404

    analyze(client)
    resp = client.get("/documents/blueprint.md")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == payload["competitorPrdMarkdown"]
    assert "focus-timer-pro-blueprint.md" in resp.headers["Content-Disposition"]

    assert client.get("/documents/rules.md").get_data(as_text=True) == payload["prdRulesMarkdown"]
    assert client.get("/documents/other.md").status_code == 404


def test_reset_returns_to_idle(client):
    analyze(client)
    resp = client.post("/reset")
    assert resp.status_code == 303
    assert client.get("/api/state").get_json()["phase"] == "idle"


def test_tab_query_does_not_change_session_tab(client):
    analyze(client)
    html = client.get("/?tab=reviews").get_data(as_text=True)

    assert "tab-reviews active" in html
    assert client.get("/api/state").get_json()["activeTab"] == "liked"
    assert "tab-liked active" in client.get("/").get_data(as_text=True)


def test_post_tab_selects_tab_for_later_pages(client, llm):
    analyze(client)
    resp = client.post("/tab", data={"tab": "rules"})
    assert resp.status_code == 303

    assert client.get("/api/state").get_json()["activeTab"] == "rules"
    assert "tab-rules active" in client.get("/").get_data(as_text=True)
    assert llm.calls == 1


def test_copy_button_renders_configured_attributes(llm, monkeypatch):
    monkeypatch.setenv("API_KEY", "test-key")
    app = create_app(make_settings(copy_feedback_ms=750), llm_factory=lambda key: llm)
    client = app.test_client()
    analyze(client)

    html = client.get("/?tab=blueprint").get_data(as_text=True)
    assert 'data-source="md-source-blueprint"' in html
    assert 'id="md-source-blueprint"' in html
    assert 'data-feedback-ms="750"' in html
    assert 'data-idle-label="Copy PRD"' in html
    assert 'data-copied-label="Copied"' in html
    assert 'data-unavailable-label="Copy unavailable"' in html


def test_create_app_reads_app_ini_and_records_its_path(tmp_path, llm, monkeypatch):
    ini = tmp_path / "analyst.ini"
    ini.write_text("[flask]\nport = 8081\n[ui]\ncopy_feedback_ms = 900\n", encoding="utf-8")
    monkeypatch.setenv("APP_INI", str(ini))

    app = create_app(llm_factory=lambda key: llm)

    assert app.config["PORT"] == 8081
    assert app.config["SETTINGS_SOURCE"] == str(ini)


def test_create_app_with_injected_settings_records_caller(llm):
    app = create_app(make_settings(), llm_factory=lambda key: llm)
    assert app.config["SETTINGS_SOURCE"] == "caller"
