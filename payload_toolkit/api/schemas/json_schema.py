# payload_toolkit/api/schemas/json_schema.py
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class ErrorEnvelope(BaseModel):
    error: bool = True
    message: str
    data: Optional[Any] = None

    def to_wire(self) -> dict[str, Any]:
        # "data" some do JSON quando ausente
        return self.model_dump(mode="json", exclude_none=True)
