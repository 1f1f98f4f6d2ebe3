from resumeflow.core.access import (
    StoragePolicy,
    can_create,
    can_read,
    can_write,
    is_trusted_service,
    owner_folder,
)
from resumeflow.db.models import CoverLetter, Resume
from resumeflow.types import Actor, BucketRule

OWNER_ID = "7a1f3c52-3d4e-4a8b-9f0e-2c6d8e1b5a40"
OTHER_ID = "c9e2b7d1-54f3-4e6a-8b2d-1f0a9c3e7d62"


def _resume() -> Resume:
    return Resume(user_id=OWNER_ID, original_file_path=f"{OWNER_ID}/cv.pdf")


def _policy() -> StoragePolicy:
    rule = BucketRule(bucket="resumes", max_file_bytes=1024, allowed_mime_types=["application/pdf", "text/plain"])
    return StoragePolicy(rules={"resumes": rule})


def test_trusted_service_identity() -> None:
    assert is_trusted_service(Actor.service())
    assert not is_trusted_service(Actor.user(OWNER_ID))
    assert not is_trusted_service(Actor.anonymous())


def test_owner_and_service_can_read_and_write_rows() -> None:
    resume = _resume()
    assert can_read(resume, Actor.user(OWNER_ID))
    assert can_write(resume, Actor.user(OWNER_ID))
    assert can_read(resume, Actor.service())
    assert can_write(resume, Actor.service())


def test_other_users_and_anonymous_are_denied() -> None:
    letter = CoverLetter(user_id=OWNER_ID, resume_file_path="cv.pdf", job_url="https://example.com/job")
    assert not can_read(letter, Actor.user(OTHER_ID))
    assert not can_write(letter, Actor.user(OTHER_ID))
    assert not can_read(letter, Actor.anonymous())


def test_only_signed_in_users_create_rows() -> None:
    assert can_create(Actor.user(OWNER_ID))
    assert not can_create(Actor.anonymous())
    assert not can_create(Actor.service())


def test_storage_reads_are_public_for_known_buckets() -> None:
    policy = _policy()
    assert policy.can_read_object("resumes", f"{OWNER_ID}/cv.pdf")
    assert not policy.can_read_object("avatars", f"{OWNER_ID}/me.png")


def test_storage_writes_limited_to_owner_folder() -> None:
    policy = _policy()
    path = f"{OWNER_ID}/cv.pdf"
    assert policy.can_write_object("resumes", path, Actor.user(OWNER_ID), size=100, mime_type="application/pdf")
    assert not policy.can_write_object("resumes", path, Actor.user(OTHER_ID), size=100, mime_type="application/pdf")
    assert not policy.can_write_object("resumes", path, Actor.anonymous(), size=100, mime_type="application/pdf")
    assert policy.can_write_object("resumes", path, Actor.service(), size=100, mime_type="application/pdf")


def test_storage_writes_respect_size_and_mime_limits() -> None:
    policy = _policy()
    owner = Actor.user(OWNER_ID)
    path = f"{OWNER_ID}/cv.pdf"
    assert not policy.can_write_object("resumes", path, owner, size=2048, mime_type="application/pdf")
    assert not policy.can_write_object("resumes", path, owner, size=100, mime_type="image/png")
    assert policy.can_write_object("resumes", path, owner, size=1024, mime_type="text/plain")


def test_default_buckets_from_settings() -> None:
    policy = StoragePolicy.from_settings()
    assert set(policy.rules) == {"resumes", "cover-letters"}
    rule = policy.rules["cover-letters"]
    assert rule.max_file_bytes == 10 * 1024 * 1024
    assert "application/pdf" in rule.allowed_mime_types


def test_owner_folder_is_first_path_segment() -> None:
    assert owner_folder(f"/{OWNER_ID}/nested/cv.pdf") == OWNER_ID
    assert owner_folder("cv.pdf") == "cv.pdf"
