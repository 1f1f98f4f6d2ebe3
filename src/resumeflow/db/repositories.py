from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from resumeflow.core.access import can_create, can_read, can_write, is_trusted_service
from resumeflow.core.paths import normalize_optional_path, normalize_pdf_path
from resumeflow.db.models import CoverLetter, Resume
from resumeflow.errors import AuthorizationError, NotFoundError
from resumeflow.types import Actor

logger = logging.getLogger(__name__)


class Repository:
    def __init__(self, session: Session):
        self.session = session

    def create_resume(
        self,
        actor: Actor,
        *,
        original_file_path: str,
        optimized_file_path: str | None = None,
        original_filename: str | None = None,
    ) -> Resume:
        if not can_create(actor):
            raise AuthorizationError("only signed-in users can create resumes")

        resume = Resume(
            user_id=actor.user_id,
            status="pending",
            original_file_path=normalize_pdf_path(original_file_path),
            optimized_file_path=normalize_optional_path(optimized_file_path),
            original_filename=original_filename,
            webhook_attempts=0,
        )
        self.session.add(resume)
        self.session.commit()
        self.session.refresh(resume)
        return resume

    def create_cover_letter(
        self,
        actor: Actor,
        *,
        resume_file_path: str,
        job_url: str,
        original_filename: str | None = None,
    ) -> CoverLetter:
        if not can_create(actor):
            raise AuthorizationError("only signed-in users can create cover letters")
        if not job_url.strip():
            raise ValueError("job_url is required")

        letter = CoverLetter(
            user_id=actor.user_id,
            status="pending",
            resume_file_path=normalize_pdf_path(resume_file_path),
            job_url=job_url,
            original_filename=original_filename,
            webhook_attempts=0,
        )
        self.session.add(letter)
        self.session.commit()
        self.session.refresh(letter)
        return letter

    def get_resume(self, record_id: str) -> Resume | None:
        return self.session.get(Resume, record_id)

    def get_cover_letter(self, record_id: str) -> CoverLetter | None:
        return self.session.get(CoverLetter, record_id)

    def get_resume_for_update(self, record_id: str) -> Resume | None:
        statement = select(Resume).where(Resume.id == record_id).with_for_update()
        return self.session.scalar(statement)

    def get_cover_letter_for_update(self, record_id: str) -> CoverLetter | None:
        statement = select(CoverLetter).where(CoverLetter.id == record_id).with_for_update()
        return self.session.scalar(statement)

    def read_resume(self, record_id: str, actor: Actor) -> Resume:
        resume = self.get_resume(record_id)
        if resume is None:
            if is_trusted_service(actor):
                raise NotFoundError("resume", record_id)
            raise AuthorizationError()
        if not can_read(resume, actor):
            raise AuthorizationError()
        return resume

    def read_cover_letter(self, record_id: str, actor: Actor) -> CoverLetter:
        letter = self.get_cover_letter(record_id)
        if letter is None:
            if is_trusted_service(actor):
                raise NotFoundError("cover_letter", record_id)
            raise AuthorizationError()
        if not can_read(letter, actor):
            raise AuthorizationError()
        return letter

    def list_resumes(self, actor: Actor) -> list[Resume]:
        if not can_create(actor):
            raise AuthorizationError()
        statement = (
            select(Resume)
            .where(Resume.user_id == actor.user_id)
            .order_by(Resume.created_at.desc(), Resume.id)
        )
        return list(self.session.scalars(statement).all())

    def list_cover_letters(self, actor: Actor) -> list[CoverLetter]:
        if not can_create(actor):
            raise AuthorizationError()
        statement = (
            select(CoverLetter)
            .where(CoverLetter.user_id == actor.user_id)
            .order_by(CoverLetter.created_at.desc(), CoverLetter.id)
        )
        return list(self.session.scalars(statement).all())

    def update_resume_paths(
        self,
        record_id: str,
        actor: Actor,
        *,
        original_file_path: str | None = None,
        optimized_file_path: str | None = None,
    ) -> Resume:
        resume = self.read_resume(record_id, actor)
        if not can_write(resume, actor):
            raise AuthorizationError()

        if original_file_path is not None:
            resume.original_file_path = normalize_pdf_path(original_file_path)
        if optimized_file_path is not None:
            resume.optimized_file_path = normalize_pdf_path(optimized_file_path)

        self.session.commit()
        self.session.refresh(resume)
        return resume

    def clean_file_paths(self) -> int:
        """Re-normalize every stored path; returns the number of rows changed."""
        changed = 0
        for resume in self.session.scalars(select(Resume)).all():
            original = normalize_pdf_path(resume.original_file_path)
            optimized = normalize_optional_path(resume.optimized_file_path)
            if (original, optimized) != (resume.original_file_path, resume.optimized_file_path):
                resume.original_file_path = original
                resume.optimized_file_path = optimized
                changed += 1

        for letter in self.session.scalars(select(CoverLetter)).all():
            source = normalize_pdf_path(letter.resume_file_path)
            generated = normalize_optional_path(letter.generated_file_path)
            if (source, generated) != (letter.resume_file_path, letter.generated_file_path):
                letter.resume_file_path = source
                letter.generated_file_path = generated
                changed += 1

        self.session.commit()
        logger.info("Normalized file paths rows_changed=%s", changed)
        return changed
