"""007: add stock classification to orders

Revision ID: 007
Revises: 006
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        ALTER TABLE orders
            ADD COLUMN classification VARCHAR(16),
            ADD CONSTRAINT ck_orders_classification
                CHECK (classification IS NULL
                       OR classification IN ('rojo', 'verde', 'sin stock'));
    """)


def downgrade() -> None:
    op.execute("ALTER TABLE orders DROP CONSTRAINT IF EXISTS ck_orders_classification;")
    op.execute("ALTER TABLE orders DROP COLUMN IF EXISTS classification;")
