"""005: create suppliers, users and notifications tables

These are owned by other modules; they exist here so the backup document
can export and restore them.

Revision ID: 005
Revises: 004
Create Date: 2026-10-05
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE suppliers (
            id            VARCHAR(64)  PRIMARY KEY,
            name          VARCHAR(200) NOT NULL,
            contact_name  VARCHAR(200),
            phone         VARCHAR(50),
            email         VARCHAR(200),
            created_at    TIMESTAMPTZ  NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("""
        CREATE TABLE users (
            id          VARCHAR(64)  PRIMARY KEY,
            name        VARCHAR(200) NOT NULL,
            email       VARCHAR(200),
            role        VARCHAR(32)  NOT NULL DEFAULT 'technician',
            branch_id   VARCHAR(64),
            created_at  TIMESTAMPTZ  NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("""
        CREATE TABLE notifications (
            id          VARCHAR(64)  PRIMARY KEY,
            user_id     VARCHAR(64)  NOT NULL,
            message     TEXT         NOT NULL,
            link        VARCHAR(300),
            read        BOOLEAN      NOT NULL DEFAULT FALSE,
            created_at  TIMESTAMPTZ  NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("CREATE INDEX idx_notifications_user ON notifications (user_id, created_at DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS notifications CASCADE;")
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
    op.execute("DROP TABLE IF EXISTS suppliers CASCADE;")
