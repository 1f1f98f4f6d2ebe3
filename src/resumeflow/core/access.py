from __future__ import annotations

from dataclasses import dataclass, field

from resumeflow.config import Settings, get_settings
from resumeflow.db.models import CoverLetter, Resume
from resumeflow.types import Actor, BucketRule

OwnedRecord = Resume | CoverLetter


def is_trusted_service(actor: Actor) -> bool:
    return actor.role == "service_role"


def is_end_user(actor: Actor) -> bool:
    return actor.role == "authenticated" and actor.user_id is not None


def is_owner(record: OwnedRecord, actor: Actor) -> bool:
    return is_end_user(actor) and record.user_id == actor.user_id


def can_create(actor: Actor) -> bool:
    return is_end_user(actor)


def can_read(record: OwnedRecord, actor: Actor) -> bool:
    return is_trusted_service(actor) or is_owner(record, actor)


def can_write(record: OwnedRecord, actor: Actor) -> bool:
    return is_trusted_service(actor) or is_owner(record, actor)


def owner_folder(path: str) -> str:
    return path.lstrip("/").split("/", 1)[0]


@dataclass(slots=True)
class StoragePolicy:
    """Object-storage rules: public reads, writes limited to the owner's folder."""

    rules: dict[str, BucketRule] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> StoragePolicy:
        settings = settings or get_settings()
        rules = {
            bucket: BucketRule(
                bucket=bucket,
                public=True,
                max_file_bytes=settings.storage_max_file_bytes,
                allowed_mime_types=settings.storage_mime_type_list,
            )
            for bucket in settings.storage_bucket_list
        }
        return cls(rules=rules)

    def can_read_object(self, bucket: str, path: str) -> bool:
        rule = self.rules.get(bucket)
        return rule is not None and rule.public and bool(path)

    def can_write_object(
        self,
        bucket: str,
        path: str,
        actor: Actor,
        *,
        size: int,
        mime_type: str,
    ) -> bool:
        rule = self.rules.get(bucket)
        if rule is None or not path:
            return False
        if size < 0 or size > rule.max_file_bytes:
            return False
        if rule.allowed_mime_types and mime_type not in rule.allowed_mime_types:
            return False

        if is_trusted_service(actor):
            return True
        return is_end_user(actor) and owner_folder(path) == actor.user_id
