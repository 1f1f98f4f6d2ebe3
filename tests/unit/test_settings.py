import pytest
from pydantic import ValidationError

from resumeflow.config import Settings


def test_settings_reject_unknown_env() -> None:
    with pytest.raises(ValidationError):
        Settings(app_env="qa")


def test_settings_split_lists() -> None:
    settings = Settings(storage_buckets="resumes, cover-letters ,", cors_origins="http://a, http://b")
    assert settings.storage_bucket_list == ["resumes", "cover-letters"]
    assert settings.cors_origin_list == ["http://a", "http://b"]
    assert "text/plain" in settings.storage_mime_type_list


def test_settings_reject_non_positive_file_limit() -> None:
    with pytest.raises(ValidationError):
        Settings(storage_max_file_bytes=0)
