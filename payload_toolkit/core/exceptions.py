# payload_toolkit/core/exceptions.py
from __future__ import annotations

from typing import Any


class AppError(Exception):
    # registros já gravados quando um lote de upload é abortado no meio
    uploaded_files: tuple = ()

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


# -------------------------
# Upload
# -------------------------

class PayloadTooLargeError(AppError):
    def __init__(self, message: str | None = None, *, limit: int | None = None) -> None:
        if message is None:
            message = (
                f"O corpo da requisição não pode ser maior que {limit} bytes."
                if limit is not None
                else "O corpo da requisição é grande demais."
            )
        super().__init__(message, status_code=413, details={"limit": limit} if limit is not None else None)
        self.limit = limit


class UnsupportedFileTypeError(AppError):
    def __init__(self, content_type: str) -> None:
        super().__init__(
            f"Tipo de arquivo não permitido: '{content_type}'.",
            status_code=415,
            details={"content_type": content_type},
        )
        self.content_type = content_type


class DirectoryError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500)


class PayloadIOError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500)


class NoFileProvidedError(AppError):
    def __init__(
        self,
        message: str = "Nenhum arquivo enviado. Use multipart/form-data com ao menos um arquivo.",
    ) -> None:
        super().__init__(message, status_code=400)


# -------------------------
# JSON
# -------------------------

class MalformedJSONError(AppError):
    def __init__(self, offset: int | None = None) -> None:
        if offset is None:
            message = "O corpo contém JSON mal formado."
        else:
            message = f"O corpo contém JSON mal formado (no caractere {offset})."
        super().__init__(message, details={"offset": offset} if offset is not None else None)
        self.offset = offset


class TypeMismatchError(AppError):
    def __init__(self, field: str | None = None, *, missing: bool = False) -> None:
        if missing:
            message = f'O corpo não contém o campo obrigatório "{field}".'
        elif field:
            message = f'O corpo contém tipo JSON incorreto para o campo "{field}".'
        else:
            message = "O corpo contém tipo JSON incorreto."
        super().__init__(message, details={"field": field} if field else None)
        self.field = field
        self.missing = missing


class UnknownFieldError(AppError):
    def __init__(self, field: str) -> None:
        super().__init__(f'O corpo contém a chave desconhecida "{field}".', details={"field": field})
        self.field = field


class EmptyBodyError(AppError):
    def __init__(self, message: str = "O corpo da requisição não pode ser vazio.") -> None:
        super().__init__(message)


class MultipleJSONValuesError(AppError):
    def __init__(self, message: str = "O corpo deve conter apenas um valor JSON.") -> None:
        super().__init__(message)


class SerializationError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500)
