"""ORM table definitions vs the raw SQL column lists the repositories use.

The ORM classes are DDL reference only, so drift between them and the
hand-written queries would otherwise go unnoticed.
"""
from src.rs_branch.infrastructure.db_models import BranchORM
from src.rs_common.database import Base
from src.rs_inventory.infrastructure import persistence as inventory_persistence
from src.rs_inventory.infrastructure.db_models import PartORM
from src.rs_order.infrastructure import persistence as order_persistence
from src.rs_order.infrastructure.db_models import OrderORM
from src.rs_print.infrastructure.db_models import ClientORM


def _columns(sql_fragment: str) -> set[str]:
    return {c.strip() for c in sql_fragment.split(",") if c.strip()}


class TestOrderTable:
    def test_select_list_matches_orm_columns(self) -> None:
        orm = {c.name for c in OrderORM.__table__.columns}
        assert _columns(order_persistence._SELECT_COLUMNS) == orm

    def test_order_number_unique(self) -> None:
        assert OrderORM.__table__.c.order_number.unique is True

    def test_money_columns_are_bigint(self) -> None:
        table = OrderORM.__table__
        for name in ("cost_spare_part", "cost_labor", "cost_pending"):
            assert table.c[name].type.__class__.__name__ == "BigInteger"


class TestPartTable:
    def test_select_list_matches_orm_columns(self) -> None:
        orm = {c.name for c in PartORM.__table__.columns}
        assert _columns(inventory_persistence._PART_COLUMNS) == orm


class TestMetadata:
    def test_all_tables_registered(self) -> None:
        assert {"orders", "parts", "branches", "clients"} <= set(Base.metadata.tables)

    def test_branch_settings_nullable(self) -> None:
        assert BranchORM.__table__.c.settings.nullable is True
        assert ClientORM.__table__.c.name.nullable is False
