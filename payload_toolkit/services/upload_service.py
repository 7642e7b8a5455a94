# payload_toolkit/services/upload_service.py
from __future__ import annotations

import logging
import os
from pathlib import PurePath
from typing import Callable

from werkzeug.datastructures import FileStorage as WzFileStorage
from werkzeug.exceptions import ClientDisconnected, RequestEntityTooLarge
from werkzeug.wrappers import Request

from payload_toolkit.core.exceptions import (
    AppError,
    NoFileProvidedError,
    PayloadIOError,
    PayloadTooLargeError,
    UnsupportedFileTypeError,
)
from payload_toolkit.core.policies import UploadPolicy
from payload_toolkit.infrastructure.security.random_string import DEFAULT_SIZE, random_string
from payload_toolkit.infrastructure.sniffing.content_type import (
    SNIFF_LEN,
    content_type_allowed,
    detect_content_type,
)
from payload_toolkit.infrastructure.storage.file_storage import UploadedFile
from payload_toolkit.infrastructure.storage.local_file_storage import (
    LocalFileStorage,
    LocalFileStorageConfig,
)

logger = logging.getLogger(__name__)


def _base_name(filename: str) -> str:
    # aceita separadores de qualquer plataforma
    return filename.replace("\\", "/").rsplit("/", 1)[-1]


def _too_large(policy: UploadPolicy) -> PayloadTooLargeError:
    return PayloadTooLargeError(
        f"O upload não pode ser maior que {policy.max_total_bytes} bytes.",
        limit=policy.max_total_bytes,
    )


class UploadService:
    """Valida, nomeia e grava os arquivos de uma requisição multipart.

    As partes são processadas na ordem em que chegam, uma de cada vez.
    Qualquer falha aborta o lote inteiro; o erro levantado carrega em
    ``uploaded_files`` os registros já gravados até ali.
    """

    def __init__(
        self,
        *,
        name_generator: Callable[[int], str] = random_string,
        name_size: int = DEFAULT_SIZE,
    ) -> None:
        self._name_generator = name_generator
        self._name_size = name_size

    def ingest(
        self,
        request: Request,
        upload_dir: str | os.PathLike[str],
        policy: UploadPolicy | None = None,
    ) -> list[UploadedFile]:
        policy = policy or UploadPolicy.from_settings()

        # diretório primeiro, depois o formulário
        storage = LocalFileStorage(config=LocalFileStorageConfig(base_path=upload_dir))
        parts = self._parse_files(request, policy)

        uploaded: list[UploadedFile] = []
        try:
            for part in parts:
                try:
                    uploaded.append(self._store_part(part, storage, policy))
                except AppError as e:
                    e.uploaded_files = tuple(uploaded)
                    raise
        finally:
            # fecha todas as partes, inclusive as que não chegaram a ser lidas
            for part in parts:
                part.close()

        logger.debug("upload concluído dir=%s files=%d", storage.base_path, len(uploaded))
        return uploaded

    def ingest_one(
        self,
        request: Request,
        upload_dir: str | os.PathLike[str],
        policy: UploadPolicy | None = None,
    ) -> UploadedFile:
        files = self.ingest(request, upload_dir, policy)
        if not files:
            raise NoFileProvidedError()
        return files[0]

    # -------------------------
    # Helpers
    # -------------------------

    @staticmethod
    def _parse_files(request: Request, policy: UploadPolicy) -> list[WzFileStorage]:
        # Content-Length declarado acima do teto: vale mesmo se o formulário já foi lido
        if request.content_length is not None and request.content_length > policy.max_total_bytes:
            raise _too_large(policy)

        # sem Content-Length, o teto fica com o parser do formulário
        request.max_content_length = policy.max_total_bytes
        try:
            files = request.files
        except RequestEntityTooLarge as e:
            raise _too_large(policy) from e
        except (ClientDisconnected, OSError) as e:
            raise PayloadIOError(f"Falha ao ler o formulário multipart: {e}") from e

        # partes sem filename vêm de inputs de arquivo vazios
        return [f for _, f in files.items(multi=True) if f is not None and f.filename]

    def _store_part(self, part: WzFileStorage, storage: LocalFileStorage, policy: UploadPolicy) -> UploadedFile:
        stream = part.stream
        try:
            head = stream.read(SNIFF_LEN)
        except (ClientDisconnected, OSError, ValueError) as e:
            raise PayloadIOError(f"Falha ao ler o arquivo '{part.filename}': {e}") from e

        content_type = detect_content_type(head)
        if not content_type_allowed(content_type, policy.allowed_content_types):
            raise UnsupportedFileTypeError(content_type)

        prefix = self._rewind(stream, head)

        original_name = _base_name(part.filename or "")
        if policy.rename_on_store:
            stored_name = f"{self._name_generator(self._name_size)}{PurePath(original_name).suffix}"
        else:
            stored_name = original_name

        size = storage.save(fileobj=stream, stored_name=stored_name, head=prefix)

        return UploadedFile(
            stored_name=stored_name,
            original_name=original_name,
            size_bytes=size,
            content_type=content_type,
        )

    @staticmethod
    def _rewind(stream, head: bytes) -> bytes:
        """Volta o stream ao início; sem seek, devolve o prefixo para ser gravado antes do resto."""
        seekable = getattr(stream, "seekable", None)
        if seekable is not None and seekable():
            try:
                stream.seek(0)
            except OSError as e:
                raise PayloadIOError(f"Falha ao reposicionar o arquivo: {e}") from e
            return b""
        return head
