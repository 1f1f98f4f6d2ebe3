from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResumeCreateRequest(BaseModel):
    original_file_path: str = Field(min_length=1)
    optimized_file_path: str | None = None
    original_filename: str | None = None


class ResumeUpdateRequest(BaseModel):
    original_file_path: str | None = Field(default=None, min_length=1)
    optimized_file_path: str | None = Field(default=None, min_length=1)


class CoverLetterCreateRequest(BaseModel):
    resume_file_path: str = Field(min_length=1)
    job_url: str = Field(min_length=1)
    original_filename: str | None = None


class WebhookBookkeeping(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    status: str
    webhook_response: dict[str, Any] | None = None
    webhook_response_at: datetime | None = None
    webhook_attempts: int
    webhook_last_attempt_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ResumeResponse(WebhookBookkeeping):
    original_file_path: str
    optimized_file_path: str | None = None
    original_filename: str | None = None
    optimized_filename: str | None = None


class CoverLetterResponse(WebhookBookkeeping):
    resume_file_path: str
    job_url: str
    generated_file_path: str | None = None
    original_filename: str | None = None
    generated_filename: str | None = None


class ResumeWebhookRequest(BaseModel):
    status: str
    optimized_file_path: str | None = Field(default=None, min_length=1)
    webhook_response: dict[str, Any] | None = None


class CoverLetterWebhookRequest(BaseModel):
    status: str
    generated_file_path: str | None = Field(default=None, min_length=1)
    generated_filename: str | None = None
    webhook_response: dict[str, Any] | None = None
