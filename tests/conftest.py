"""Fixtures compartilhadas da suíte de testes."""

from __future__ import annotations

import io

import pytest

from payload_toolkit.config.settings import Settings
from payload_toolkit.main import create_app

# assinatura PNG + início do chunk IHDR de uma imagem 1x1
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n"
    b"\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
    b"\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01\x00\x05\x18\xd8N"
    b"\x00\x00\x00\x00IEND\xaeB`\x82"
)

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00" + b"\x00" * 600 + b"\xff\xd9"

TEXT_BYTES = b"hello world\nsome plain text\n"


@pytest.fixture
def app():
    app = create_app(Settings(debug=False, environment="test"))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def multipart_request(app):
    """Abre um contexto de requisição multipart; ``files`` é {campo: [(bytes, nome)]}."""

    def _build(files: dict[str, list[tuple[bytes, str]]], form: dict[str, str] | None = None):
        data: dict = dict(form or {})
        for field, items in files.items():
            data[field] = [(io.BytesIO(content), name) for content, name in items]
        return app.test_request_context(
            "/upload",
            method="POST",
            data=data,
            content_type="multipart/form-data",
        )

    return _build
