# payload_toolkit/api/middlewares/error_handler.py
import logging

from flask import Flask
from werkzeug.exceptions import HTTPException

from payload_toolkit.api.json_io import error_json
from payload_toolkit.config.settings import settings
from payload_toolkit.core.exceptions import AppError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        return error_json(err, err.status_code, data=err.details or None)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return error_json(err.description or err.name, err.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception("erro inesperado: %s", err)

        if settings.debug or app.debug:
            return error_json(err, 500)

        return error_json("Erro interno do servidor.", 500)
