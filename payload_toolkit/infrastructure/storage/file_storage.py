# payload_toolkit/infrastructure/storage/file_storage.py
from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Protocol


@dataclass(frozen=True)
class UploadedFile:
    stored_name: str
    original_name: str
    size_bytes: int
    content_type: str | None = None


class FileStorage(Protocol):
    def save(self, *, fileobj: BinaryIO, stored_name: str, head: bytes = b"") -> int:
        """Grava ``head`` seguido do restante de ``fileobj`` e retorna o total de bytes gravados."""
        raise NotImplementedError
