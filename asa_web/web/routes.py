## routes.py
from __future__ import annotations

import io
import re

from flask import Blueprint, abort, current_app, jsonify, redirect, render_template, request, send_file, url_for

from asa_web.domain.state import ActiveTab, PageState, TabSelected, transition
from asa_web.web.copy_button import CopyButton
from asa_web.web.result_views import DOCUMENT_VIEWS, build_tabs, tab_view

LOADING_HINT = "Reading reviews, identifying patterns, and formulating strategy..."
EMPTY_HINT = "Waiting to analyze your next target app."


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", (name or "").lower()).strip("-") or "app"


def _page_model(page: PageState, copy_button: CopyButton, *, url: str = "", form_error: str | None = None) -> dict:
    analysis = page.analysis
    result = analysis.result
    return dict(
        phase=analysis.phase,
        is_loading=analysis.is_loading,
        error=analysis.error,
        form_error=form_error,
        result=result,
        url=url or page.url,
        active_tab=page.active_tab.value,
        tabs=build_tabs(page.active_tab) if result else [],
        view=tab_view(result, page.active_tab) if result else None,
        copy_button=copy_button,
        loading_hint=LOADING_HINT,
        empty_hint=EMPTY_HINT,
    )


def create_blueprint(analysis_client, session, url_normalizer, *, copy_feedback_ms: int = 2000) -> Blueprint:
    bp = Blueprint("web", __name__)
    copy_button = CopyButton(feedback_ms=copy_feedback_ms)

    @bp.get("/")
    def index():
        page = session.snapshot()
        tab_raw = request.args.get("tab")
        if tab_raw:
            # view-only override for this response; the session keeps its tab
            page = transition(page, TabSelected(tab=ActiveTab.parse(tab_raw)))
        return render_template("index.html", **_page_model(page, copy_button))

    @bp.post("/analyze")
    def analyze():
        url_raw = (request.form.get("url") or "").strip()

        try:
            url = url_normalizer.normalize(url_raw)
        except ValueError as e:
            current_app.logger.info("Rejected url %r: %s", url_raw, e)
            page = session.snapshot()
            return render_template("index.html", **_page_model(page, copy_button, url=url_raw, form_error=str(e))), 400

        page = session.run(url, analysis_client)
        current_app.logger.info("Analyze %s -> %s", url, page.analysis.phase)
        return redirect(url_for("web.index"), code=303)

    @bp.post("/tab")
    def select_tab():
        session.select_tab(ActiveTab.parse(request.form.get("tab")))
        return redirect(url_for("web.index"), code=303)

    @bp.post("/reset")
    def reset():
        session.reset()
        return redirect(url_for("web.index"), code=303)

    @bp.get("/documents/<doc>.md")
    def download_document(doc: str):
        make_view = DOCUMENT_VIEWS.get(doc)
        if make_view is None:
            abort(404)

        result = session.snapshot().analysis.result
        if result is None:
            abort(404)

        view = make_view(result)
        return send_file(
            io.BytesIO(view.source.encode("utf-8")),
            mimetype="text/markdown",
            as_attachment=True,
            download_name=f"{_slug(result.app_name)}-{doc}.md",
        )

    @bp.get("/api/state")
    def api_state():
        page = session.snapshot()
        analysis = page.analysis
        return jsonify(
            phase=analysis.phase,
            isLoading=analysis.is_loading,
            error=analysis.error,
            result=analysis.result.to_dict() if analysis.result else None,
            activeTab=page.active_tab.value,
            url=page.url,
        )

    return bp
