from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from resumeflow.api.deps import get_actor, get_db, require_user
from resumeflow.api.schemas import (
    CoverLetterCreateRequest,
    CoverLetterResponse,
    CoverLetterWebhookRequest,
    ResumeCreateRequest,
    ResumeResponse,
    ResumeUpdateRequest,
    ResumeWebhookRequest,
)
from resumeflow.core.gateway import WebhookGateway
from resumeflow.db.repositories import Repository
from resumeflow.errors import AuthorizationError, InvalidStatusError, NotFoundError
from resumeflow.types import Actor

router = APIRouter(prefix="/api", tags=["api"])


@router.post("/resumes", response_model=ResumeResponse)
def create_resume(
    payload: ResumeCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_user),
) -> ResumeResponse:
    repo = Repository(db)
    try:
        resume = repo.create_resume(
            actor,
            original_file_path=payload.original_file_path,
            optimized_file_path=payload.optimized_file_path,
            original_filename=payload.original_filename,
        )
    except AuthorizationError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return ResumeResponse.model_validate(resume)


@router.get("/resumes", response_model=list[ResumeResponse])
def list_resumes(db: Session = Depends(get_db), actor: Actor = Depends(require_user)) -> list[ResumeResponse]:
    repo = Repository(db)
    try:
        rows = repo.list_resumes(actor)
    except AuthorizationError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return [ResumeResponse.model_validate(row) for row in rows]


@router.get("/resumes/{resume_id}", response_model=ResumeResponse)
def get_resume(
    resume_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_user),
) -> ResumeResponse:
    repo = Repository(db)
    try:
        resume = repo.read_resume(resume_id, actor)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except AuthorizationError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return ResumeResponse.model_validate(resume)


@router.patch("/resumes/{resume_id}", response_model=ResumeResponse)
def update_resume(
    resume_id: str,
    payload: ResumeUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_user),
) -> ResumeResponse:
    repo = Repository(db)
    try:
        resume = repo.update_resume_paths(
            resume_id,
            actor,
            original_file_path=payload.original_file_path,
            optimized_file_path=payload.optimized_file_path,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except AuthorizationError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return ResumeResponse.model_validate(resume)


@router.post("/cover-letters", response_model=CoverLetterResponse)
def create_cover_letter(
    payload: CoverLetterCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_user),
) -> CoverLetterResponse:
    repo = Repository(db)
    try:
        letter = repo.create_cover_letter(
            actor,
            resume_file_path=payload.resume_file_path,
            job_url=payload.job_url,
            original_filename=payload.original_filename,
        )
    except AuthorizationError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return CoverLetterResponse.model_validate(letter)


@router.get("/cover-letters", response_model=list[CoverLetterResponse])
def list_cover_letters(
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_user),
) -> list[CoverLetterResponse]:
    repo = Repository(db)
    try:
        rows = repo.list_cover_letters(actor)
    except AuthorizationError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return [CoverLetterResponse.model_validate(row) for row in rows]


@router.get("/cover-letters/{letter_id}", response_model=CoverLetterResponse)
def get_cover_letter(
    letter_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_user),
) -> CoverLetterResponse:
    repo = Repository(db)
    try:
        letter = repo.read_cover_letter(letter_id, actor)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except AuthorizationError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return CoverLetterResponse.model_validate(letter)


@router.post("/webhooks/resumes/{resume_id}", response_model=ResumeResponse)
def resume_webhook(
    resume_id: str,
    payload: ResumeWebhookRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> ResumeResponse:
    gateway = WebhookGateway(db)
    try:
        resume = gateway.apply_webhook_update(
            actor,
            resume_id,
            payload.status,
            result_path=payload.optimized_file_path,
            payload=payload.webhook_response,
        )
    except AuthorizationError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except InvalidStatusError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return ResumeResponse.model_validate(resume)


@router.post("/webhooks/cover-letters/{letter_id}", response_model=CoverLetterResponse)
def cover_letter_webhook(
    letter_id: str,
    payload: CoverLetterWebhookRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> CoverLetterResponse:
    gateway = WebhookGateway(db)
    try:
        letter = gateway.apply_cover_letter_update(
            actor,
            letter_id,
            payload.status,
            result_path=payload.generated_file_path,
            payload=payload.webhook_response,
            generated_filename=payload.generated_filename,
        )
    except AuthorizationError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except InvalidStatusError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return CoverLetterResponse.model_validate(letter)
