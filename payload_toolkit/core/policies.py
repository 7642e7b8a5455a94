# payload_toolkit/core/policies.py
from __future__ import annotations

from dataclasses import dataclass, field

from payload_toolkit.config.settings import Settings, settings as default_settings

DEFAULT_MAX_TOTAL_BYTES = 1024 ** 3
DEFAULT_MAX_BODY_BYTES = 1024 * 1024


@dataclass(frozen=True)
class UploadPolicy:
    max_total_bytes: int = DEFAULT_MAX_TOTAL_BYTES
    # vazio = aceita qualquer tipo detectado
    allowed_content_types: frozenset[str] = field(default_factory=frozenset)
    rename_on_store: bool = True

    def __post_init__(self) -> None:
        if self.max_total_bytes <= 0:
            raise ValueError("max_total_bytes deve ser maior que zero.")
        # normaliza para comparação case-insensitive
        normalized = frozenset(t.strip().lower() for t in self.allowed_content_types if t.strip())
        object.__setattr__(self, "allowed_content_types", normalized)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> UploadPolicy:
        cfg = settings or default_settings
        return cls(
            max_total_bytes=cfg.upload_max_total_bytes,
            allowed_content_types=cfg.allowed_mime_types,
            rename_on_store=cfg.upload_rename_on_store,
        )


@dataclass(frozen=True)
class JSONCodecPolicy:
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    allow_unknown_fields: bool = False

    def __post_init__(self) -> None:
        if self.max_body_bytes <= 0:
            raise ValueError("max_body_bytes deve ser maior que zero.")

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> JSONCodecPolicy:
        cfg = settings or default_settings
        return cls(
            max_body_bytes=cfg.json_max_body_bytes,
            allow_unknown_fields=cfg.json_allow_unknown_fields,
        )
