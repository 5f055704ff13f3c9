"""003: create clients table

Revision ID: 003
Revises: 002
Create Date: 2026-10-05
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE clients (
            id          VARCHAR(64)  PRIMARY KEY,
            name        VARCHAR(100) NOT NULL,
            last_name   VARCHAR(100),
            dni         VARCHAR(32),
            phone       VARCHAR(50),
            email       VARCHAR(200),
            address     VARCHAR(300),
            created_at  TIMESTAMPTZ  NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("CREATE INDEX idx_clients_dni ON clients (dni);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS clients CASCADE;")
