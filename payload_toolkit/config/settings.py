# payload_toolkit/config/settings.py
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    files_base_path: str = "./_uploads"

    # 1 GiB para o formulário multipart inteiro
    upload_max_total_bytes: int = 1024 ** 3
    upload_rename_on_store: bool = True

    # Whitelist de tipos detectados (vazio = aceita tudo)
    # Ex: "application/pdf,image/png,image/jpeg"
    allowed_mime_types_raw: str = ""

    # 1 MiB por corpo JSON
    json_max_body_bytes: int = 1024 * 1024
    json_allow_unknown_fields: bool = False

    # None = sem timeout (o chamador impõe o prazo)
    remote_json_timeout_seconds: float | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("files_base_path", "allowed_mime_types_raw", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @field_validator("upload_max_total_bytes", "json_max_body_bytes")
    @classmethod
    def positive_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("o limite em bytes deve ser maior que zero")
        return v

    @property
    def allowed_mime_types(self) -> frozenset[str]:
        parts = [p.strip() for p in self.allowed_mime_types_raw.split(",")]
        return frozenset(p for p in parts if p)


settings = Settings()
