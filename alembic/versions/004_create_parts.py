"""004: create parts table

Revision ID: 004
Revises: 003
Create Date: 2026-10-05
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE parts (
            id          VARCHAR(64)  PRIMARY KEY,
            name        VARCHAR(200) NOT NULL,
            sku         VARCHAR(64),
            sale_price  BIGINT       NOT NULL DEFAULT 0,
            cost_price  BIGINT       NOT NULL DEFAULT 0,
            stock       INTEGER      NOT NULL DEFAULT 0,
            min_stock   INTEGER      NOT NULL DEFAULT 0,
            created_at  TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            updated_at  TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_parts_stock_gte_0       CHECK (stock >= 0),
            CONSTRAINT ck_parts_sale_price_gte_0  CHECK (sale_price >= 0),
            CONSTRAINT ck_parts_cost_price_gte_0  CHECK (cost_price >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_parts_updated_at
            BEFORE UPDATE ON parts
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE parts IS 'Spare parts stock; prices in cents';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS parts CASCADE;")
