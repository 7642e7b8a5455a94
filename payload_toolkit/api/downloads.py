# payload_toolkit/api/downloads.py
from __future__ import annotations

import os
from pathlib import Path

from flask import Response, send_file

from payload_toolkit.core.exceptions import NotFoundError


def download_static_file(path: str | os.PathLike[str], display_name: str) -> Response:
    """Força o download de ``path`` com o nome ``display_name``.

    O Content-Disposition é sempre ``attachment`` para o navegador não
    exibir o arquivo inline.
    """
    abs_path = Path(path).expanduser().resolve()
    if not abs_path.exists() or not abs_path.is_file():
        raise NotFoundError("Arquivo não encontrado.")

    response = send_file(
        abs_path,
        as_attachment=True,
        download_name=display_name,
        conditional=True,
        etag=True,
        last_modified=True,
    )

    # nome ASCII vai sempre entre aspas; o resto fica com o filename* do werkzeug
    if display_name.isascii():
        quoted = display_name.replace("\\", "\\\\").replace('"', '\\"')
        response.headers["Content-Disposition"] = f'attachment; filename="{quoted}"'

    return response
