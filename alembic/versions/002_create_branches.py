"""002: create branches table

Revision ID: 002
Revises: 001
Create Date: 2026-10-05
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE branches (
            id          VARCHAR(64)  PRIMARY KEY,
            name        VARCHAR(200) NOT NULL,
            settings    JSONB,
            created_at  TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            updated_at  TIMESTAMPTZ  NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_branches_updated_at
            BEFORE UPDATE ON branches
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute(
        "COMMENT ON COLUMN branches.settings IS "
        "'Company identity, legal texts and abandonment thresholds; NULL = system defaults';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS branches CASCADE;")
