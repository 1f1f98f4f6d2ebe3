from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from resumeflow.config import get_settings

# Webhook retries for the same record can overlap; SQLite waits on the write
# lock instead of failing fast.
SQLITE_BUSY_TIMEOUT_SEC = 30

settings = get_settings()
connect_args = (
    {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT_SEC}
    if settings.database_url.startswith("sqlite")
    else {}
)
engine = create_engine(settings.database_url, connect_args=connect_args, future=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db_session() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
