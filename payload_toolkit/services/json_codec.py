# payload_toolkit/services/json_codec.py
from __future__ import annotations

import dataclasses
import json
import logging
import types
from functools import lru_cache
from typing import Annotated, Any, BinaryIO, TypeVar, Union, get_args, get_origin, get_type_hints

from flask import json as flask_json
from pydantic import BaseModel, TypeAdapter, ValidationError
from werkzeug.exceptions import ClientDisconnected, RequestEntityTooLarge

from payload_toolkit.core.exceptions import (
    EmptyBodyError,
    MalformedJSONError,
    MultipleJSONValuesError,
    PayloadIOError,
    PayloadTooLargeError,
    SerializationError,
    TypeMismatchError,
    UnknownFieldError,
)
from payload_toolkit.core.policies import JSONCodecPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

READ_CHUNK = 64 * 1024
_JSON_WS = " \t\n\r"


class _InvalidConstant(ValueError):
    pass


def _reject_constant(name: str):
    # NaN / Infinity não são JSON válido
    raise _InvalidConstant(name)


_decoder = json.JSONDecoder(parse_constant=_reject_constant)


# -------------------------
# Leitura limitada
# -------------------------

def read_limited(body: bytes | BinaryIO, limit: int) -> bytes:
    """Lê no máximo ``limit`` bytes; qualquer byte além disso é PayloadTooLarge."""
    if isinstance(body, (bytes, bytearray, memoryview)):
        data = bytes(body)
        if len(data) > limit:
            raise PayloadTooLargeError(limit=limit)
        return data

    buf = bytearray()
    try:
        while True:
            chunk = body.read(min(READ_CHUNK, limit + 1 - len(buf)))
            if not chunk:
                break
            buf.extend(chunk)
            if len(buf) > limit:
                raise PayloadTooLargeError(limit=limit)
    except RequestEntityTooLarge as e:
        raise PayloadTooLargeError(limit=limit) from e
    except (ClientDisconnected, OSError) as e:
        raise PayloadIOError(f"Falha ao ler o corpo da requisição: {e}") from e
    return bytes(buf)


# -------------------------
# Chaves desconhecidas
# -------------------------

def _is_structured(tp: Any) -> bool:
    return isinstance(tp, type) and (issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp))


def _known_fields(shape: type) -> dict[str, Any]:
    if issubclass(shape, BaseModel):
        known: dict[str, Any] = {}
        by_name = bool(shape.model_config.get("populate_by_name"))
        for name, field in shape.model_fields.items():
            known[field.alias or name] = field.annotation
            if by_name or not field.alias:
                known[name] = field.annotation
        return known
    hints = get_type_hints(shape)
    return {f.name: hints.get(f.name, Any) for f in dataclasses.fields(shape)}


def find_unknown_field(shape: Any, value: Any, prefix: str = "") -> str | None:
    """Retorna o caminho da primeira chave de ``value`` que não existe em ``shape``.

    Desce por models aninhados, listas, dicts e Optional. Unions com mais
    de um membro ficam a cargo da validação do pydantic.
    """
    origin = get_origin(shape)
    args = get_args(shape)

    if origin is Annotated:
        return find_unknown_field(args[0], value, prefix)

    if origin in (Union, types.UnionType):
        members = [a for a in args if a is not type(None)]
        if len(members) == 1:
            return find_unknown_field(members[0], value, prefix)
        return None

    if origin in (list, set, frozenset, tuple):
        if isinstance(value, list) and args:
            for idx, item in enumerate(value):
                item_shape = args[idx] if origin is tuple and args[-1] is not Ellipsis and idx < len(args) else args[0]
                found = find_unknown_field(item_shape, item, f"{prefix}{idx}.")
                if found:
                    return found
        return None

    if origin is dict:
        if isinstance(value, dict) and len(args) == 2:
            for key, item in value.items():
                found = find_unknown_field(args[1], item, f"{prefix}{key}.")
                if found:
                    return found
        return None

    if _is_structured(shape) and isinstance(value, dict):
        known = _known_fields(shape)
        for key, item in value.items():
            if key not in known:
                return f"{prefix}{key}"
            found = find_unknown_field(known[key], item, f"{prefix}{key}.")
            if found:
                return found

    return None


# -------------------------
# Decode
# -------------------------

@lru_cache(maxsize=256)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def _byte_offset(text: str, pos: int) -> int:
    return len(text[:pos].encode("utf-8"))


def _classify_validation_error(exc: ValidationError) -> Exception:
    first = exc.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    kind = first.get("type", "")

    if kind == "extra_forbidden":
        return UnknownFieldError(loc)
    if kind == "missing":
        return TypeMismatchError(loc, missing=True)
    return TypeMismatchError(loc or None)


def decode_json(body: bytes | BinaryIO, shape: type[T] | Any, policy: JSONCodecPolicy | None = None) -> T:
    """Decodifica exatamente um valor JSON de ``body`` para ``shape``.

    ``shape`` pode ser um ``BaseModel``, uma dataclass ou qualquer tipo
    aceito pelo ``TypeAdapter`` do pydantic. Falhas viram erros da
    taxonomia em ``core.exceptions``; nada é logado aqui.
    """
    policy = policy or JSONCodecPolicy.from_settings()

    raw = read_limited(body, policy.max_body_bytes)
    text = raw.decode("utf-8", errors="replace")

    start = len(text) - len(text.lstrip(_JSON_WS))
    if start == len(text):
        raise EmptyBodyError()

    try:
        value, end = _decoder.raw_decode(text, start)
    except json.JSONDecodeError as e:
        if e.pos >= len(text):
            # documento truncado
            raise MalformedJSONError() from e
        raise MalformedJSONError(_byte_offset(text, e.pos)) from e
    except _InvalidConstant as e:
        raise MalformedJSONError() from e

    if not policy.allow_unknown_fields:
        unknown = find_unknown_field(shape, value)
        if unknown:
            raise UnknownFieldError(unknown)

    try:
        # strict: o tipo JSON precisa bater com o campo, sem coerção
        result = _adapter(shape).validate_json(text[start:end], strict=True)
    except ValidationError as e:
        raise _classify_validation_error(e) from e

    if text[end:].strip(_JSON_WS):
        raise MultipleJSONValuesError()

    logger.debug("corpo JSON decodificado bytes=%d shape=%s", len(raw), getattr(shape, "__name__", shape))
    return result


# -------------------------
# Encode
# -------------------------

def _to_jsonable(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json")
    return payload


def encode_json(payload: Any) -> str:
    try:
        return flask_json.dumps(_to_jsonable(payload), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Falha ao serializar JSON: {e}") from e
