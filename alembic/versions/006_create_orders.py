"""006: create orders table, order number sequence and snapshot guard

Revision ID: 006
Revises: 005
Create Date: 2026-10-05
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("CREATE SEQUENCE order_number_seq START WITH 1 INCREMENT BY 1 NO CYCLE;")
    op.execute("""
        CREATE TABLE orders (
            id                              VARCHAR(32)  PRIMARY KEY,
            order_number                    VARCHAR(32)  NOT NULL,
            branch_id                       VARCHAR(64)  NOT NULL,
            client_id                       VARCHAR(64)  NOT NULL,
            assigned_technician_id          VARCHAR(64),
            previous_order_id               VARCHAR(32),
            device_brand                    VARCHAR(100) NOT NULL,
            device_model                    VARCHAR(100) NOT NULL,
            device_imei                     VARCHAR(64),
            imei_not_visible                BOOLEAN      NOT NULL DEFAULT FALSE,
            declared_fault                  TEXT         NOT NULL,
            unlock_pattern_provided         BOOLEAN      NOT NULL DEFAULT FALSE,
            unlock_code                     VARCHAR(100),
            checklist                       JSONB        NOT NULL DEFAULT '{}'::jsonb,
            battery_consumption             VARCHAR(50),
            battery_capacity_mah            VARCHAR(50),
            damage_risk                     TEXT,
            observations                    TEXT,
            customer_accepted               BOOLEAN      NOT NULL DEFAULT FALSE,
            customer_signature_name         VARCHAR(200),
            data_loss_disclaimer_accepted   BOOLEAN      NOT NULL DEFAULT FALSE,
            privacy_policy_accepted         BOOLEAN      NOT NULL DEFAULT FALSE,
            parts_used                      JSONB        NOT NULL DEFAULT '[]'::jsonb,
            cost_spare_part                 BIGINT       NOT NULL DEFAULT 0,
            cost_labor                      BIGINT       NOT NULL DEFAULT 0,
            cost_pending                    BIGINT       NOT NULL DEFAULT 0,
            has_warranty                    BOOLEAN      NOT NULL DEFAULT FALSE,
            warranty_type                   VARCHAR(10)  NOT NULL DEFAULT 'none',
            warranty_start_date             DATE,
            warranty_end_date               DATE,
            warranty_covered_item           TEXT,
            warranty_notes                  TEXT,
            legal_snapshot                  JSONB        NOT NULL,
            entry_date                      TIMESTAMPTZ  NOT NULL,
            promised_delivery_date          DATE,
            ready_for_pickup_date           TIMESTAMPTZ,
            delivery_date                   TIMESTAMPTZ,
            status                          VARCHAR(32)  NOT NULL DEFAULT 'Recibido',
            comments_history                JSONB        NOT NULL DEFAULT '[]'::jsonb,
            created_by                      VARCHAR(64)  NOT NULL,
            created_at                      TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            updated_at                      TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            last_updated_by                 VARCHAR(64),
            CONSTRAINT uq_orders_order_number   UNIQUE (order_number),
            CONSTRAINT ck_orders_status CHECK (status IN (
                'Recibido', 'En Diagnóstico', 'Presupuestado', 'Presupuesto Aprobado',
                'En Espera de Repuestos', 'En Reparación', 'Reparado',
                'En Control de Calidad', 'Listo para Entrega', 'Entregado',
                'Presupuesto Rechazado', 'Sin Reparación'
            )),
            CONSTRAINT ck_orders_warranty_type CHECK (
                warranty_type IN ('30d', '60d', '90d', 'custom', 'none')
            ),
            CONSTRAINT ck_orders_costs_gte_0 CHECK (
                cost_spare_part >= 0 AND cost_labor >= 0 AND cost_pending >= 0
            ),
            CONSTRAINT ck_orders_warranty_range CHECK (
                warranty_end_date IS NULL OR warranty_start_date IS NULL
                OR warranty_end_date > warranty_start_date
            ),
            CONSTRAINT ck_orders_comments_array CHECK (jsonb_typeof(comments_history) = 'array')
        );
    """)
    op.execute("CREATE INDEX idx_orders_branch_status ON orders (branch_id, status);")
    op.execute("CREATE INDEX idx_orders_client ON orders (client_id);")

    # Legal text is frozen at intake; reject any UPDATE that changes it.
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_forbid_legal_snapshot_update()
        RETURNS TRIGGER AS $$
        BEGIN
            IF NEW.legal_snapshot IS DISTINCT FROM OLD.legal_snapshot THEN
                RAISE EXCEPTION 'orders.legal_snapshot is write-once (order %)', OLD.id;
            END IF;
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TRIGGER trg_orders_legal_snapshot_immutable
            BEFORE UPDATE ON orders
            FOR EACH ROW EXECUTE FUNCTION fn_forbid_legal_snapshot_update();
    """)
    op.execute(
        "COMMENT ON TABLE orders IS 'Service orders. Amounts in cents, updated_at stamped by the app';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS orders CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_forbid_legal_snapshot_update();")
    op.execute("DROP SEQUENCE IF EXISTS order_number_seq;")
