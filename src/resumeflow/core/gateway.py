from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from resumeflow.core.access import is_trusted_service
from resumeflow.core.paths import normalize_pdf_path
from resumeflow.db.base import utcnow
from resumeflow.db.models import CoverLetter, Resume
from resumeflow.db.repositories import Repository
from resumeflow.errors import AuthorizationError, InvalidStatusError, NotFoundError
from resumeflow.types import RECORD_STATUSES, Actor

logger = logging.getLogger(__name__)


def validate_status(status: str) -> str:
    if status not in RECORD_STATUSES:
        raise InvalidStatusError(status)
    return status


class WebhookGateway:
    """Applies job outcomes reported by the job-processing service.

    Each call runs in one transaction against a row-locked record, so either
    the whole update lands or the record is left as it was. The attempt
    counter is incremented with ``webhook_attempts + 1`` in SQL so concurrent
    deliveries for the same record are all counted.
    """

    def __init__(self, session: Session, *, clock: Callable[[], datetime] | None = None):
        self.session = session
        self.repo = Repository(session)
        self.clock = clock or utcnow

    def apply_webhook_update(
        self,
        actor: Actor,
        record_id: str,
        status: str,
        result_path: str | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Resume:
        self._authorize(actor, "resume", record_id)
        validate_status(status)

        try:
            resume = self.repo.get_resume_for_update(record_id)
            if resume is None:
                raise NotFoundError("resume", record_id)

            if result_path is not None:
                resume.optimized_file_path = normalize_pdf_path(result_path)
            self._stamp(resume, status=status, payload=payload)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(resume)
        logger.info(
            "Applied resume webhook id=%s status=%s attempts=%s",
            record_id,
            status,
            resume.webhook_attempts,
        )
        return resume

    def apply_cover_letter_update(
        self,
        actor: Actor,
        record_id: str,
        status: str,
        result_path: str | None = None,
        payload: dict[str, Any] | None = None,
        generated_filename: str | None = None,
    ) -> CoverLetter:
        self._authorize(actor, "cover_letter", record_id)
        validate_status(status)

        try:
            letter = self.repo.get_cover_letter_for_update(record_id)
            if letter is None:
                raise NotFoundError("cover_letter", record_id)

            if result_path is not None:
                letter.generated_file_path = normalize_pdf_path(result_path)
            if generated_filename is not None:
                letter.generated_filename = generated_filename
            self._stamp(letter, status=status, payload=payload)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(letter)
        logger.info(
            "Applied cover letter webhook id=%s status=%s attempts=%s",
            record_id,
            status,
            letter.webhook_attempts,
        )
        return letter

    def _authorize(self, actor: Actor, kind: str, record_id: str) -> None:
        if not is_trusted_service(actor):
            logger.warning("Rejected %s webhook id=%s role=%s", kind, record_id, actor.role)
            raise AuthorizationError("webhook updates require the service identity")

    def _stamp(
        self,
        record: Resume | CoverLetter,
        *,
        status: str,
        payload: dict[str, Any] | None,
    ) -> None:
        now = self.clock()
        record.status = status
        if payload is not None:
            record.webhook_response = dict(payload)
            record.webhook_response_at = now
            record.webhook_last_attempt_at = now
            record.webhook_attempts = type(record).webhook_attempts + 1
        record.updated_at = now
