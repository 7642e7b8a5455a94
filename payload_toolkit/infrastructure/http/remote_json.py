# payload_toolkit/infrastructure/http/remote_json.py
from __future__ import annotations

import logging
from typing import Any

import httpx

from payload_toolkit.config.settings import settings
from payload_toolkit.core.exceptions import PayloadIOError
from payload_toolkit.services.json_codec import encode_json

logger = logging.getLogger(__name__)


def push_json_to_remote(
    uri: str,
    payload: Any,
    client: httpx.Client | None = None,
) -> tuple[httpx.Response, int]:
    """Envia ``payload`` como JSON via POST para ``uri``.

    Uma única tentativa, sem retry. Se ``client`` não for informado, um
    cliente padrão é criado e fechado aqui.
    """
    body = encode_json(payload)
    headers = {"Content-Type": "application/json"}

    owns_client = client is None
    http = client or httpx.Client(timeout=settings.remote_json_timeout_seconds)
    try:
        response = http.post(uri, content=body.encode("utf-8"), headers=headers)
    except httpx.HTTPError as e:
        raise PayloadIOError(f"Falha ao enviar JSON para '{uri}': {e}") from e
    finally:
        if owns_client:
            http.close()

    logger.debug("JSON enviado uri=%s status=%d", uri, response.status_code)
    return response, response.status_code
