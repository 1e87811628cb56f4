########## ini_config.py

from __future__ import annotations

import logging
import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path

INI_DEFAULT_NAME = "AppStoreAnalyst.ini"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppSettings:
    gemini_model: str
    api_key_env: str
    timeout_seconds: int
    enable_search: bool

    default_scheme: str
    allowed_hosts: frozenset[str]

    copy_feedback_ms: int

    flask_host: str
    flask_port: int
    flask_debug: bool

    log_level: str


class IniConfig:
    """
    Adapter around ConfigParser.
    Keeps INI handling out of your app/service code.
    A missing file is not an error: every value has a default, only the API key is required (from env).
    """

    def __init__(self, ini_path: Path, *, required: bool = False):
        self._ini_path = ini_path
        self._cfg = ConfigParser()
        read_ok = self._cfg.read(str(ini_path), encoding="utf-8-sig")
        if not read_ok:
            if required:
                raise FileNotFoundError(f"INI file not found or unreadable: {ini_path}")
            log.info("INI file %s not found; using defaults", ini_path)

    @property
    def ini_path(self) -> Path:
        return self._ini_path

    @staticmethod
    def from_env_or_default() -> "IniConfig":
        ini_raw = (os.getenv("APP_INI") or "").strip()
        # An explicit APP_INI must exist; the repo-root default may be absent
        if ini_raw:
            return IniConfig(Path(ini_raw), required=True)
        return IniConfig(Path(__file__).resolve().parents[2] / INI_DEFAULT_NAME)

    def _str(self, section: str, key: str, default: str) -> str:
        return (self._cfg.get(section, key, fallback=default) or "").strip() or default

    def _int(self, section: str, key: str, default: int, *, minimum: int = 0) -> int:
        try:
            value = self._cfg.getint(section, key, fallback=default)
        except ValueError as e:
            raise ValueError(f"[{section}] {key} must be an integer") from e
        if value < minimum:
            raise ValueError(f"[{section}] {key} must be >= {minimum}, got {value}")
        return value

    def _bool(self, section: str, key: str, default: bool) -> bool:
        try:
            return self._cfg.getboolean(section, key, fallback=default)
        except ValueError as e:
            raise ValueError(f"[{section}] {key} must be a boolean") from e

    def load_settings(self) -> AppSettings:
        # Gemini
        gemini_model = self._str("gemini", "model", "gemini-3-pro-preview")
        api_key_env = self._str("gemini", "api_key_env", "API_KEY")
        timeout_seconds = self._int("gemini", "timeout_seconds", 120, minimum=1)
        enable_search = self._bool("gemini", "enable_search", True)

        # URL normalization
        default_scheme = self._str("url_normalization", "default_scheme", "https").lower()
        if default_scheme not in ("http", "https"):
            raise ValueError(f"[url_normalization] default_scheme must be http or https, got {default_scheme!r}")
        allowed_hosts = frozenset(
            h.strip().lower()
            for h in (self._cfg.get("url_normalization", "allowed_hosts", fallback="") or "").split(",")
            if h.strip()
        )

        # UI
        copy_feedback_ms = self._int("ui", "copy_feedback_ms", 2000, minimum=1)

        # Flask
        flask_host = self._str("flask", "host", "127.0.0.1")
        flask_port = self._int("flask", "port", 5000, minimum=1)
        flask_debug = self._bool("flask", "debug", False)

        # Logging
        log_level = self._str("logging", "level", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"[logging] level is not a logging level: {log_level!r}")

        return AppSettings(
            gemini_model=gemini_model,
            api_key_env=api_key_env,
            timeout_seconds=timeout_seconds,
            enable_search=enable_search,
            default_scheme=default_scheme,
            allowed_hosts=allowed_hosts,
            copy_feedback_ms=copy_feedback_ms,
            flask_host=flask_host,
            flask_port=flask_port,
            flask_debug=flask_debug,
            log_level=log_level,
        )

