from flask import Flask

from payload_toolkit.config.settings import Settings, settings as default_settings


def configure_app(app: Flask, settings: Settings | None = None) -> None:
    cfg = settings or default_settings
    app.config["ENV"] = cfg.environment
    app.config["DEBUG"] = cfg.debug
    # teto global; os limites por chamada ficam nas policies
    app.config["MAX_CONTENT_LENGTH"] = max(cfg.upload_max_total_bytes, cfg.json_max_body_bytes)
