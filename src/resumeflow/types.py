from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

RecordStatus = Literal["pending", "processing", "completed", "failed"]
RECORD_STATUSES: frozenset[str] = frozenset(get_args(RecordStatus))

ActorRole = Literal["anon", "authenticated", "service_role"]


class Actor(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: ActorRole = "anon"
    user_id: str | None = None

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("user_id must not be blank")
        return value

    @classmethod
    def anonymous(cls) -> Actor:
        return cls(role="anon")

    @classmethod
    def user(cls, user_id: str) -> Actor:
        return cls(role="authenticated", user_id=user_id)

    @classmethod
    def service(cls) -> Actor:
        return cls(role="service_role")


class BucketRule(BaseModel):
    bucket: str
    public: bool = True
    max_file_bytes: int = 10 * 1024 * 1024
    allowed_mime_types: list[str] = Field(default_factory=list)
