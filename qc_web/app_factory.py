from __future__ import annotations

import logging
from typing import Optional

from flask import Flask

from qc_web.adapters.grammarbot import GrammarBotClient
from qc_web.adapters.pa11y import Pa11yRunner
from qc_web.adapters.readable import ReadableClient
from qc_web.config.ini_config import AppSettings, IniConfig
from qc_web.repositories.entry_repository import ContentfulEntryRepository
from qc_web.services.check_aggregator import CheckAggregator
from qc_web.services.entry_sync import EntrySync
from qc_web.services.quality_check_service import QualityCheckService
from qc_web.web.controller import CheckController
from qc_web.web.routes import create_blueprint

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def build_check_service(settings: AppSettings) -> QualityCheckService:
    entries = ContentfulEntryRepository(
        base_url=settings.cms_base_url,
        space_id=settings.cms_space_id,
        environment_id=settings.cms_environment_id,
        access_token=settings.cms_access_token,
        timeout=settings.timeout_seconds,
    )

    aggregator = CheckAggregator(
        grammar=GrammarBotClient(
            api_url=settings.grammar_api_url,
            api_key=settings.grammar_api_key,
            language=settings.grammar_language,
            timeout=settings.timeout_seconds,
        ),
        readability=ReadableClient(
            api_url=settings.readability_api_url,
            api_key=settings.readability_api_key,
            timeout=settings.timeout_seconds,
        ),
        accessibility=Pa11yRunner(
            command=settings.pa11y_command,
            standard=settings.accessibility_standard,
            locale=settings.locale,
            timeout=settings.timeout_seconds,
        ),
        readability_threshold=settings.readability_threshold,
        max_workers=settings.max_workers,
    )

    entry_sync = EntrySync(entries=entries, field=settings.errors_field, locale=settings.locale)

    return QualityCheckService(
        entries=entries,
        aggregator=aggregator,
        entry_sync=entry_sync,
        body_field=settings.body_field,
        locale=settings.locale,
    )


def create_app(
    settings: Optional[AppSettings] = None,
    check_service: Optional[QualityCheckService] = None,
) -> Flask:
    """
    Composition root: loads settings (INI via APP_INI unless given), wires
    repository -> checkers -> aggregator -> service -> controller and registers routes.
    """
    if settings is None:
        settings = IniConfig.from_env_or_default().load_settings()

    configure_logging(settings.log_level)

    if check_service is None:
        check_service = build_check_service(settings)

    controller = CheckController(check_service)

    app = Flask(__name__)
    app.register_blueprint(create_blueprint(controller))

    app.config["HOST"] = settings.flask_host
    app.config["PORT"] = settings.flask_port
    app.config["DEBUG"] = settings.flask_debug

    return app
