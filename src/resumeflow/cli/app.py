from __future__ import annotations

import json
from typing import Any

import typer
import uvicorn

from resumeflow.api.app import create_app
from resumeflow.api.schemas import CoverLetterResponse, ResumeResponse
from resumeflow.config import get_settings
from resumeflow.core.gateway import WebhookGateway
from resumeflow.db.init import init_database
from resumeflow.db.repositories import Repository
from resumeflow.db.session import SessionLocal
from resumeflow.errors import RecordError
from resumeflow.logging_config import configure_logging
from resumeflow.types import Actor

app = typer.Typer(help="resumeflow CLI")
resume_app = typer.Typer(help="Resume records")
cover_letter_app = typer.Typer(help="Cover letter records")
webhook_app = typer.Typer(help="Replay job outcomes as the service identity")
paths_app = typer.Typer(help="File path maintenance")

app.add_typer(resume_app, name="resume")
app.add_typer(cover_letter_app, name="cover-letter")
app.add_typer(webhook_app, name="webhook")
app.add_typer(paths_app, name="paths")

_INITIALIZED = False


def ensure_initialized() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    init_database()
    _INITIALIZED = True


def _echo(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


def _parse_payload(raw: str | None) -> dict | None:
    if raw is None:
        return None
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"payload is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise typer.BadParameter("payload must be a JSON object")
    return payload


@app.command("init")
def init_cmd() -> None:
    """Create the data directory and database tables."""
    configure_logging()
    result = init_database()
    _echo({"ok": True, **result})


@resume_app.command("create")
def resume_create(
    user_id: str = typer.Option(..., "--user-id"),
    path: str = typer.Option(..., "--path"),
    filename: str | None = typer.Option(None, "--filename"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        repo = Repository(db)
        resume = repo.create_resume(Actor.user(user_id), original_file_path=path, original_filename=filename)
        _echo(ResumeResponse.model_validate(resume).model_dump(mode="json"))


@resume_app.command("show")
def resume_show(
    resume_id: str = typer.Option(..., "--id"),
    user_id: str | None = typer.Option(None, "--user-id", help="Read as this user instead of the service"),
) -> None:
    configure_logging()
    ensure_initialized()
    actor = Actor.user(user_id) if user_id else Actor.service()
    with SessionLocal() as db:
        repo = Repository(db)
        try:
            resume = repo.read_resume(resume_id, actor)
        except RecordError as exc:
            raise typer.BadParameter(str(exc)) from exc
        _echo(ResumeResponse.model_validate(resume).model_dump(mode="json"))


@resume_app.command("list")
def resume_list(user_id: str = typer.Option(..., "--user-id")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        repo = Repository(db)
        rows = repo.list_resumes(Actor.user(user_id))
        _echo([ResumeResponse.model_validate(row).model_dump(mode="json") for row in rows])


@cover_letter_app.command("create")
def cover_letter_create(
    user_id: str = typer.Option(..., "--user-id"),
    resume_path: str = typer.Option(..., "--resume-path"),
    job_url: str = typer.Option(..., "--job-url"),
    filename: str | None = typer.Option(None, "--filename"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        repo = Repository(db)
        try:
            letter = repo.create_cover_letter(
                Actor.user(user_id),
                resume_file_path=resume_path,
                job_url=job_url,
                original_filename=filename,
            )
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        _echo(CoverLetterResponse.model_validate(letter).model_dump(mode="json"))


@cover_letter_app.command("show")
def cover_letter_show(
    letter_id: str = typer.Option(..., "--id"),
    user_id: str | None = typer.Option(None, "--user-id", help="Read as this user instead of the service"),
) -> None:
    configure_logging()
    ensure_initialized()
    actor = Actor.user(user_id) if user_id else Actor.service()
    with SessionLocal() as db:
        repo = Repository(db)
        try:
            letter = repo.read_cover_letter(letter_id, actor)
        except RecordError as exc:
            raise typer.BadParameter(str(exc)) from exc
        _echo(CoverLetterResponse.model_validate(letter).model_dump(mode="json"))


@webhook_app.command("resume")
def webhook_resume(
    resume_id: str = typer.Option(..., "--id"),
    status: str = typer.Option(..., "--status"),
    path: str | None = typer.Option(None, "--path"),
    payload: str | None = typer.Option(None, "--payload", help="JSON object"),
) -> None:
    configure_logging()
    ensure_initialized()
    body = _parse_payload(payload)
    with SessionLocal() as db:
        gateway = WebhookGateway(db)
        try:
            resume = gateway.apply_webhook_update(Actor.service(), resume_id, status, result_path=path, payload=body)
        except RecordError as exc:
            raise typer.BadParameter(str(exc)) from exc
        _echo(ResumeResponse.model_validate(resume).model_dump(mode="json"))


@webhook_app.command("cover-letter")
def webhook_cover_letter(
    letter_id: str = typer.Option(..., "--id"),
    status: str = typer.Option(..., "--status"),
    path: str | None = typer.Option(None, "--path"),
    filename: str | None = typer.Option(None, "--filename"),
    payload: str | None = typer.Option(None, "--payload", help="JSON object"),
) -> None:
    configure_logging()
    ensure_initialized()
    body = _parse_payload(payload)
    with SessionLocal() as db:
        gateway = WebhookGateway(db)
        try:
            letter = gateway.apply_cover_letter_update(
                Actor.service(),
                letter_id,
                status,
                result_path=path,
                payload=body,
                generated_filename=filename,
            )
        except RecordError as exc:
            raise typer.BadParameter(str(exc)) from exc
        _echo(CoverLetterResponse.model_validate(letter).model_dump(mode="json"))


@paths_app.command("clean")
def paths_clean() -> None:
    """Normalize every stored file path to a single .pdf suffix."""
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        changed = Repository(db).clean_file_paths()
        _echo({"rows_changed": changed})


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
) -> None:
    configure_logging()
    ensure_initialized()
    settings = get_settings()
    app_instance = create_app()
    uvicorn.run(app_instance, host=host or settings.app_host, port=port or settings.app_port)
