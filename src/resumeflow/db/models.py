from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from resumeflow.db.base import Base, TimestampMixin


def new_record_id() -> str:
    return str(uuid.uuid4())


class WebhookBookkeepingMixin:
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False, index=True)
    webhook_response: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    webhook_response_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    webhook_attempts: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    webhook_last_attempt_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class Resume(WebhookBookkeepingMixin, TimestampMixin, Base):
    __tablename__ = "resumes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_record_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    original_file_path: Mapped[str] = mapped_column(Text, nullable=False)
    optimized_file_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    original_filename: Mapped[str | None] = mapped_column(String(255), nullable=True)
    optimized_filename: Mapped[str | None] = mapped_column(String(255), nullable=True)


class CoverLetter(WebhookBookkeepingMixin, TimestampMixin, Base):
    __tablename__ = "cover_letters"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_record_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    resume_file_path: Mapped[str] = mapped_column(Text, nullable=False)
    job_url: Mapped[str] = mapped_column(Text, nullable=False)
    generated_file_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    original_filename: Mapped[str | None] = mapped_column(String(255), nullable=True)
    generated_filename: Mapped[str | None] = mapped_column(String(255), nullable=True)
