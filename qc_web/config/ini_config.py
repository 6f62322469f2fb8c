########## ini_config.py

import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

INI_DEFAULT_NAME = "qc_web.ini"

# Env vars consulted when the INI leaves a credential empty
ENV_CONTENTFUL_TOKEN = "CONTENTFUL_MANAGEMENT_TOKEN"
ENV_GRAMMARBOT_KEY = "GRAMMARBOT_API_KEY"
ENV_READABLE_KEY = "READABLE_IO_API_KEY"


@dataclass(frozen=True)
class AppSettings:
    # Contentful Management API
    cms_base_url: str
    cms_space_id: str
    cms_environment_id: str
    cms_access_token: str
    body_field: str
    errors_field: str
    locale: str

    # Remote checks
    grammar_api_url: str
    grammar_api_key: str
    grammar_language: str
    readability_api_url: str
    readability_api_key: str
    readability_threshold: float
    pa11y_command: str
    accessibility_standard: str

    # Execution
    timeout_seconds: Optional[float]    # None = wait indefinitely
    max_workers: int

    flask_host: str
    flask_port: int
    flask_debug: bool

    log_level: str


class IniConfig:
    """
    Adapter around ConfigParser and environment lookups.
    Keeps INI handling out of your app/service code.
    """

    def __init__(self, ini_path: Path):
        self._ini_path = ini_path
        self._cfg = ConfigParser(interpolation=None)
        read_ok = self._cfg.read(str(ini_path), encoding="utf-8-sig")
        if not read_ok:
            raise FileNotFoundError(f"INI file not found or unreadable: {ini_path}")

    @staticmethod
    def from_env_or_default() -> "IniConfig":
        ini_raw = (os.getenv("APP_INI") or "").strip()
        # If APP_INI is not set, default to repo-root-relative ini location
        ini_path = Path(ini_raw) if ini_raw else (Path(__file__).resolve().parents[2] / INI_DEFAULT_NAME)
        return IniConfig(ini_path)

    @property
    def ini_path(self) -> Path:
        return self._ini_path

    def _cfg_str(self, section: str, key: str, default: str = "") -> str:
        return (self._cfg.get(section, key, fallback=default) or "").strip() or default

    def _cfg_secret(self, section: str, key: str, env_name: str) -> str:
        """
        Reads a credential. ${VAR} references are expanded; an empty value
        falls back to env_name. Missing credentials are returned as "" and
        reported by the client that needs them.
        """
        raw = (self._cfg.get(section, key, fallback="") or "").strip()
        if raw:
            expanded = os.path.expandvars(raw)
            # unresolved ${VAR}; a literal value that merely starts with "$" is kept
            if expanded == raw and raw.startswith("${") and raw.endswith("}"):
                expanded = ""
            raw = expanded
        return raw or (os.getenv(env_name) or "").strip()

    def load_settings(self) -> AppSettings:
        # Contentful
        cms_base_url = self._cfg_str("contentful", "base_url", "https://api.contentful.com").rstrip("/")
        cms_space_id = self._cfg_str("contentful", "space_id")
        cms_environment_id = self._cfg_str("contentful", "environment_id", "master")
        cms_access_token = self._cfg_secret("contentful", "access_token", ENV_CONTENTFUL_TOKEN)
        body_field = self._cfg_str("contentful", "body_field", "body")
        errors_field = self._cfg_str("contentful", "errors_field", "errors")
        locale = self._cfg_str("contentful", "locale", "en-US")

        # Grammar
        grammar_api_url = self._cfg_str("grammar", "api_url", "https://api.grammarbot.io/v2/check")
        grammar_api_key = self._cfg_secret("grammar", "api_key", ENV_GRAMMARBOT_KEY)
        grammar_language = self._cfg_str("grammar", "language", locale)

        # Readability
        readability_api_url = self._cfg_str("readability", "api_url", "https://readable.io/api/text/")
        readability_api_key = self._cfg_secret("readability", "api_key", ENV_READABLE_KEY)
        readability_threshold = self._cfg.getfloat("readability", "threshold", fallback=60.0)

        # Accessibility
        pa11y_command = self._cfg_str("accessibility", "command", "pa11y")
        accessibility_standard = self._cfg_str("accessibility", "standard", "WCAG2AA")

        # Execution
        timeout_raw = self._cfg.getfloat("execution", "timeout_seconds", fallback=0.0)
        timeout_seconds = timeout_raw if timeout_raw > 0 else None
        max_workers = self._cfg.getint("execution", "max_workers", fallback=3)

        # Flask
        flask_host = self._cfg_str("flask", "host", "127.0.0.1")
        flask_port = self._cfg.getint("flask", "port", fallback=5000)
        flask_debug = self._cfg.getboolean("flask", "debug", fallback=False)

        log_level = self._cfg_str("logging", "level", "INFO").upper()

        # Validate
        if max_workers < 1:
            raise ValueError(f"execution.max_workers must be >= 1, got {max_workers}")

        return AppSettings(
            cms_base_url=cms_base_url,
            cms_space_id=cms_space_id,
            cms_environment_id=cms_environment_id,
            cms_access_token=cms_access_token,
            body_field=body_field,
            errors_field=errors_field,
            locale=locale,
            grammar_api_url=grammar_api_url,
            grammar_api_key=grammar_api_key,
            grammar_language=grammar_language,
            readability_api_url=readability_api_url,
            readability_api_key=readability_api_key,
            readability_threshold=readability_threshold,
            pa11y_command=pa11y_command,
            accessibility_standard=accessibility_standard,
            timeout_seconds=timeout_seconds,
            max_workers=max_workers,
            flask_host=flask_host,
            flask_port=flask_port,
            flask_debug=flask_debug,
            log_level=log_level,
        )
