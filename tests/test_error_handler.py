from flask import request
from pydantic import BaseModel

from payload_toolkit.api.json_io import read_json
from payload_toolkit.core.exceptions import NoFileProvidedError, UnsupportedFileTypeError
from payload_toolkit.core.policies import JSONCodecPolicy


class Foo(BaseModel):
    foo: str = ""


def test_app_error_becomes_envelope(app, client):
    @app.get("/unsupported")
    def unsupported():
        raise UnsupportedFileTypeError("application/zip")

    response = client.get("/unsupported")

    assert response.status_code == 415
    body = response.get_json()
    assert body["error"] is True
    assert body["message"] == "Tipo de arquivo não permitido: 'application/zip'."
    assert body["data"] == {"content_type": "application/zip"}


def test_app_error_without_details_omits_data(app, client):
    @app.get("/nofile")
    def nofile():
        raise NoFileProvidedError()

    response = client.get("/nofile")

    assert response.status_code == 400
    assert "data" not in response.get_json()


def test_decode_errors_reach_the_client(app, client):
    @app.post("/json")
    def read():
        read_json(request, Foo, JSONCodecPolicy(max_body_bytes=8))
        return "", 204

    response = client.post("/json", data=b'{"foo":"bar"}', content_type="application/json")

    assert response.status_code == 413
    assert response.get_json()["data"] == {"limit": 8}


def test_http_exception_becomes_envelope(client):
    response = client.get("/does-not-exist")

    assert response.status_code == 404
    body = response.get_json()
    assert body["error"] is True
    assert body["message"]


def test_unexpected_error_hides_message(app, client, caplog):
    @app.get("/boom")
    def boom():
        raise RuntimeError("segredo interno")

    response = client.get("/boom")

    assert response.status_code == 500
    assert response.get_json() == {"error": True, "message": "Erro interno do servidor."}
    assert "segredo interno" in caplog.text
