# payload_toolkit/infrastructure/storage/local_file_storage.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from payload_toolkit.core.exceptions import DirectoryError, PayloadIOError
from payload_toolkit.infrastructure.storage.file_storage import FileStorage

logger = logging.getLogger(__name__)

DIR_MODE = 0o755
CHUNK_SIZE = 1024 * 1024  # 1MB


def create_dir_if_not_exists(path: str | os.PathLike[str]) -> Path:
    """Cria o diretório e todos os pais se ainda não existirem (idempotente)."""
    target = Path(path).expanduser()

    if target.exists() and not target.is_dir():
        raise DirectoryError(f"Caminho de uploads inválido: '{target}' não é um diretório.")

    try:
        target.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    except PermissionError as e:
        raise DirectoryError(
            f"Sem permissão para criar/acessar a pasta de uploads: '{target}'."
        ) from e
    except OSError as e:
        raise DirectoryError(f"Falha ao preparar diretório de uploads '{target}': {e}") from e

    return target


@dataclass(frozen=True)
class LocalFileStorageConfig:
    base_path: str | os.PathLike[str]


class LocalFileStorage(FileStorage):
    def __init__(self, *, config: LocalFileStorageConfig) -> None:
        raw = str(config.base_path or "").strip()
        if not raw:
            raise DirectoryError("Storage de arquivos não configurado (diretório de uploads vazio).")

        self._base = create_dir_if_not_exists(raw).resolve()

        if not os.access(self._base, os.W_OK):
            raise DirectoryError(f"Pasta de uploads sem permissão de escrita: '{self._base}'.")

    @property
    def base_path(self) -> Path:
        return self._base

    def abs_path_from_stored(self, stored_name: str) -> Path:
        abs_path = (self._base / stored_name).resolve()

        # anti path traversal: precisa ser um arquivo direto dentro da base
        if abs_path.parent != self._base:
            raise PayloadIOError(f"Nome de arquivo inválido: '{stored_name}'.")

        return abs_path

    def save(self, *, fileobj: BinaryIO, stored_name: str, head: bytes = b"") -> int:
        abs_path = self.abs_path_from_stored(stored_name)
        size = 0

        try:
            with open(abs_path, "wb") as out:
                if head:
                    out.write(head)
                    size += len(head)
                while True:
                    chunk = fileobj.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    out.write(chunk)
                    size += len(chunk)
        except PermissionError as e:
            self._discard_partial(abs_path)
            raise DirectoryError(
                f"Sem permissão para gravar arquivo em '{abs_path}'. Verifique permissões da pasta de uploads."
            ) from e
        except (OSError, ValueError) as e:
            # ValueError: stream fechado no meio da cópia
            self._discard_partial(abs_path)
            raise PayloadIOError(f"Falha ao salvar arquivo: {e}") from e

        logger.debug("arquivo gravado path=%s bytes=%d", abs_path, size)
        return size

    @staticmethod
    def _discard_partial(abs_path: Path) -> None:
        # melhor esforço: remove arquivo parcial se existir
        try:
            abs_path.unlink(missing_ok=True)
        except OSError:
            logger.warning("não foi possível remover arquivo parcial path=%s", abs_path)
