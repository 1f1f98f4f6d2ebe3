"""Normalize stored file paths

Revision ID: 0002_clean_file_paths
Revises: 0001_initial_schema
Create Date: 2025-01-25

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

from resumeflow.core.paths import normalize_optional_path, normalize_pdf_path

# revision identifiers, used by Alembic.
revision = "0002_clean_file_paths"
down_revision = "0001_initial_schema"
branch_labels = None
depends_on = None


def _clean_table(table: str, required: str, optional: str) -> None:
    bind = op.get_bind()
    if table not in sa.inspect(bind).get_table_names():
        return

    rows = bind.execute(sa.text(f"SELECT id, {required}, {optional} FROM {table}")).all()
    for row_id, required_path, optional_path in rows:
        cleaned_required = normalize_pdf_path(required_path)
        cleaned_optional = normalize_optional_path(optional_path)
        if (cleaned_required, cleaned_optional) == (required_path, optional_path):
            continue
        bind.execute(
            sa.text(f"UPDATE {table} SET {required} = :required, {optional} = :optional WHERE id = :id"),
            {"required": cleaned_required, "optional": cleaned_optional, "id": row_id},
        )


def upgrade() -> None:
    _clean_table("resumes", "original_file_path", "optimized_file_path")
    _clean_table("cover_letters", "resume_file_path", "generated_file_path")


def downgrade() -> None:
    # Normalization is lossy; there is nothing to restore.
    pass
