from asa_web.app_factory import create_app

if __name__ == "__main__":
    app = create_app()
    # threaded: a second submission may arrive while the first analysis is still running
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"], threaded=True)

#############################
#
# Key design patterns used
# •	Application Factory: create_app() builds the app and dependencies.
# •	Dependency Injection (manual): dependencies are passed into routes and service constructors.
# •	Service Layer: AnalysisClient encapsulates the one use case (URL -> AnalysisResult).
# •	Port / Adapter: LlmClient is the port, GeminiLlmClient (google-genai) the adapter.
# •	State container: AnalysisSession owns the only mutable state; domain/state.transition() is the reducer.
# •	Strategy: UrlNormalizer allows you to swap normalization logic.
######################################################################
# High-level architecture
# •	Goal: Thin web layer, business logic in services, the model call behind a port, configuration isolated,
#   domain models centralized.
# •	Presentation (Flask blueprint + Jinja templates + view models)
#    |
#    v
# Session (request tokens, PageState) -> Service Layer (AnalysisClient, prompt_builder, result_parser)
#    |
#    v
# Port (ports/llm.py) -> Adapter (adapters/llm_gemini.py)
#    |
#    v
# External System (Gemini + Google Search)
# ________________________________________
# Directory layout and responsibilities
# •	asa_web/app_factory.py — composition root: settings, AppStoreUrlNormalizer, AnalysisClient, AnalysisSession,
#   register_blueprint(...)
# •	asa_web/config/ — IniConfig reads AppStoreAnalyst.ini (or APP_INI) into a frozen AppSettings.
#   The API key is never in the INI; it is read from the env var named by [gemini] api_key_env at call time.
# •	asa_web/domain/ — Feature, Review, AnalysisResult; AnalysisError taxonomy; PageState + transition().
#   No Flask, no SDK code.
# •	asa_web/services/ — AnalysisClient, prompt_builder, result_parser, AnalysisSession, url_normalization.
# •	asa_web/ports/, asa_web/adapters/ — LLM interface and its google-genai implementation.
# •	asa_web/web/ — routes (HTTP only), result_views (tab view models), markdown_view (line converter),
#   copy_button (copy button settings rendered as data attributes for static/app.js).
# •	asa_web/templates/, asa_web/static/ — Jinja templates and the page script/stylesheet.
# ________________________________________
# •	Runtime request flow
# •	GET / -> web.index renders the page from session.snapshot()  (?tab=<key> overrides the tab for that response only)
# •	POST /tab -> session.select_tab(tab) -> 303 redirect to GET /
# •	POST /analyze -> url_normalizer.normalize -> session.run(url, analysis_client)
#      session.begin(url) issues token N, state -> loading
#      AnalysisClient.analyze(url) -> one generate_content call -> parse + validate
#      session.complete(N, result) / session.fail(N, message); ignored if a newer token exists
#   -> 303 redirect to GET /
# •	GET /documents/<rules|blueprint>.md -> raw markdown download
# •	GET /api/state -> JSON snapshot of the page state
# ________________________________________
