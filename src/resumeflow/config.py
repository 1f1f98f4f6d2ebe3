from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


DEFAULT_ALLOWED_MIME_TYPES = ",".join(
    [
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/octet-stream",
        "image/pdf",
        "text/plain",
    ]
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "resumeflow"
    app_env: str = "development"
    app_host: str = "127.0.0.1"
    app_port: int = 8790
    log_level: str = "INFO"

    database_url: str = "sqlite:///./data/resumeflow.db"
    data_dir: Path = Path("./data")

    # Bearer token presented by the job-processing service.
    service_role_key: str = ""

    storage_buckets: str = "resumes,cover-letters"
    storage_max_file_bytes: int = 10 * 1024 * 1024
    storage_allowed_mime_types: str = DEFAULT_ALLOWED_MIME_TYPES

    cors_origins: str = "http://127.0.0.1:3000"

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, value: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if value not in allowed:
            raise ValueError(f"app_env must be one of {sorted(allowed)}")
        return value

    @field_validator("storage_max_file_bytes")
    @classmethod
    def validate_max_file_bytes(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("storage_max_file_bytes must be positive")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def storage_bucket_list(self) -> list[str]:
        return [bucket.strip() for bucket in self.storage_buckets.split(",") if bucket.strip()]

    @property
    def storage_mime_type_list(self) -> list[str]:
        return [
            mime.strip() for mime in self.storage_allowed_mime_types.split(",") if mime.strip()
        ]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
