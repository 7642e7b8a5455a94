# payload_toolkit/api/json_io.py
from __future__ import annotations

from typing import Any, Mapping, TypeVar

from flask import Response
from werkzeug.datastructures import Headers
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.wrappers import Request

from payload_toolkit.api.schemas.json_schema import ErrorEnvelope
from payload_toolkit.core.exceptions import AppError, PayloadTooLargeError
from payload_toolkit.core.policies import JSONCodecPolicy
from payload_toolkit.services.json_codec import decode_json, encode_json

T = TypeVar("T")

JSON_MIMETYPE = "application/json"

HeadersLike = Headers | Mapping[str, str | list[str]] | list[tuple[str, str]]


def read_json(request: Request, shape: type[T], policy: JSONCodecPolicy | None = None) -> T:
    """Lê o corpo da requisição como exatamente um valor JSON do formato ``shape``."""
    policy = policy or JSONCodecPolicy.from_settings()

    # Content-Length declarado acima do teto: nem começa a ler
    if request.content_length is not None and request.content_length > policy.max_body_bytes:
        raise PayloadTooLargeError(limit=policy.max_body_bytes)

    try:
        stream = request.stream
    except RequestEntityTooLarge as e:
        raise PayloadTooLargeError(limit=policy.max_body_bytes) from e

    return decode_json(stream, shape, policy)


def write_json(status: int, payload: Any, headers: HeadersLike | None = None) -> Response:
    body = encode_json(payload)

    response = Response(body, status=status, mimetype=JSON_MIMETYPE)

    # headers do chamador entram depois do default e podem sobrescrevê-lo
    if headers:
        extra = headers if isinstance(headers, Headers) else Headers(headers)
        seen: set[str] = set()
        for key in extra.keys():
            lowered = key.lower()
            if lowered in seen:
                continue
            seen.add(lowered)
            response.headers.setlist(key, extra.getlist(key))

    return response


def error_json(err: Exception | str, status: int = 400, data: Any = None) -> Response:
    message = err.message if isinstance(err, AppError) else str(err)
    envelope = ErrorEnvelope(error=True, message=message, data=data)
    return write_json(status, envelope.to_wire())
