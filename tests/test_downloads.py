import pytest

from payload_toolkit.api.downloads import download_static_file
from payload_toolkit.core.exceptions import NotFoundError


@pytest.fixture
def picture(tmp_path):
    path = tmp_path / "pic.jpg"
    path.write_bytes(b"\xff\xd8\xff" + b"\x00" * 97)
    return path


def test_download_static_file(app, client, picture):
    @app.get("/download")
    def download():
        return download_static_file(picture, "puppy.jpg")

    response = client.get("/download")

    assert response.status_code == 200
    assert response.headers["Content-Length"] == "100"
    assert response.headers["Content-Disposition"] == 'attachment; filename="puppy.jpg"'
    assert response.data == picture.read_bytes()


def test_download_non_ascii_name_keeps_encoded_filename(app, client, picture):
    @app.get("/download")
    def download():
        return download_static_file(picture, "relatório.jpg")

    response = client.get("/download")

    assert response.headers["Content-Disposition"].startswith("attachment;")
    assert "filename*=UTF-8''relat%C3%B3rio.jpg" in response.headers["Content-Disposition"]


def test_download_missing_file(app, client, tmp_path):
    @app.get("/download")
    def download():
        return download_static_file(tmp_path / "nope.jpg", "nope.jpg")

    response = client.get("/download")

    assert response.status_code == 404
    assert response.get_json()["message"] == "Arquivo não encontrado."


def test_download_missing_file_raises(app, tmp_path):
    with app.test_request_context("/"):
        with pytest.raises(NotFoundError):
            download_static_file(tmp_path / "nope.jpg", "nope.jpg")
