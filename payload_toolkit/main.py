# payload_toolkit/main.py
from __future__ import annotations

from flask import Flask

from payload_toolkit.api.middlewares.error_handler import register_error_handlers
from payload_toolkit.config.flask_config import configure_app
from payload_toolkit.config.logging_config import configure_logging
from payload_toolkit.config.settings import Settings


def create_app(settings: Settings | None = None) -> Flask:
    configure_logging(settings.log_level if settings else None)

    app = Flask(__name__)
    configure_app(app, settings)
    register_error_handlers(app)

    return app
