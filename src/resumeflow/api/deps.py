from __future__ import annotations

import secrets
from collections.abc import Generator

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from resumeflow.config import get_settings
from resumeflow.db.session import get_db_session
from resumeflow.types import Actor


def get_db() -> Generator[Session, None, None]:
    yield from get_db_session()


def resolve_actor(authorization: str | None, user_id: str | None, service_role_key: str) -> Actor:
    if authorization and service_role_key:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and secrets.compare_digest(
            token.strip().encode("utf-8"), service_role_key.encode("utf-8")
        ):
            return Actor.service()
    if user_id and user_id.strip():
        return Actor.user(user_id.strip())
    return Actor.anonymous()


def get_actor(
    authorization: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None),
) -> Actor:
    return resolve_actor(authorization, x_user_id, get_settings().service_role_key)


def require_user(actor: Actor = Depends(get_actor)) -> Actor:
    if actor.role == "anon":
        raise HTTPException(status_code=401, detail="Authentication required")
    return actor
