from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Point settings at a throwaway database before any resumeflow import.
_TEST_DB = Path(tempfile.mkdtemp(prefix="resumeflow-tests-")) / "resumeflow.db"
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_DB}")
os.environ.setdefault("SERVICE_ROLE_KEY", "test-service-key")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATA_DIR", str(_TEST_DB.parent))

import pytest

from resumeflow.db import models  # noqa: F401,E402
from resumeflow.db.base import Base  # noqa: E402
from resumeflow.db.session import engine  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
