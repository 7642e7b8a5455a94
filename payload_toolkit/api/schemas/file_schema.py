# payload_toolkit/api/schemas/file_schema.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from payload_toolkit.infrastructure.storage.file_storage import UploadedFile


class UploadFileResponse(BaseModel):
    stored_name: str = Field(min_length=1, max_length=255)
    original_name: str = Field(min_length=1, max_length=255)
    size_bytes: int = Field(ge=0)
    content_type: Optional[str] = Field(default=None, max_length=100)

    @classmethod
    def from_uploaded(cls, f: UploadedFile) -> UploadFileResponse:
        return cls(
            stored_name=f.stored_name,
            original_name=f.original_name,
            size_bytes=f.size_bytes,
            content_type=f.content_type,
        )


class UploadFilesResponse(BaseModel):
    files: list[UploadFileResponse]
