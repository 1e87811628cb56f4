from __future__ import annotations

import logging
from typing import Optional

from flask import Flask

from asa_web.adapters.llm_gemini import gemini_client_factory
from asa_web.config import AppSettings, IniConfig
from asa_web.ports.llm import LlmClientFactory
from asa_web.services.analysis_client import AnalysisClient
from asa_web.services.analysis_session import AnalysisSession
from asa_web.services.url_normalization import AppStoreUrlNormalizer
from asa_web.web.routes import create_blueprint


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("asa_web").setLevel(level)


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    llm_factory: Optional[LlmClientFactory] = None,
) -> Flask:
    """
    Composition root: settings -> normalizer, client, session -> blueprint.
    Tests pass their own settings and a fake llm_factory.
    """
    ini_source = "caller"
    if settings is None:
        ini = IniConfig.from_env_or_default()
        settings = ini.load_settings()
        ini_source = str(ini.ini_path)

    configure_logging(settings.log_level)

    url_norm = AppStoreUrlNormalizer(
        default_scheme=settings.default_scheme,
        allowed_hosts=settings.allowed_hosts,
    )

    analysis_client = AnalysisClient(
        llm_factory=llm_factory or gemini_client_factory(settings.gemini_model, settings.timeout_seconds),
        api_key_env=settings.api_key_env,
        enable_search=settings.enable_search,
    )

    session = AnalysisSession()

    app = Flask(__name__)
    app.register_blueprint(
        create_blueprint(analysis_client, session, url_norm, copy_feedback_ms=settings.copy_feedback_ms)
    )

    app.config["HOST"] = settings.flask_host
    app.config["PORT"] = settings.flask_port
    app.config["DEBUG"] = settings.flask_debug
    app.config["SETTINGS_SOURCE"] = ini_source
    app.logger.setLevel(settings.log_level)

    app.logger.info("Settings from %s", ini_source)
    app.logger.info("App Store Analyst ready model=%s search=%s", settings.gemini_model, settings.enable_search)
    return app
