"""Unit tests for backup export / restore."""
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.rs_backup.application.schemas import BackupDocument
from src.rs_backup.application.service import BackupApplicationService, decode_orders
from src.rs_backup.domain.repository import RAW_COLLECTIONS
from src.rs_backup.infrastructure.persistence import RawCollectionRepository
from src.rs_common.actor import Actor
from src.rs_common.errors import ValidationError
from src.rs_order.domain.codec import order_to_document
from src.rs_order.domain.models import Order, OrderPartItem
from src.rs_order.domain.snapshot import take_snapshot

ACTOR = Actor(user_id="admin-1", user_name="Admin")


def _order(order_id: str = "ord_1") -> Order:
    return Order(
        id=order_id, order_number="ORD001", branch_id="br-1", client_id="cli-1",
        device_brand="Samsung", device_model="A10", declared_fault="Pantalla",
        legal=take_snapshot("br-1", None), entry_date=datetime(2026, 3, 1, tzinfo=UTC),
        created_by="u1", parts_used=[OrderPartItem("p1", "Pantalla", 1, 30000, 18000)],
        cost_spare_part=30000,
    )


@pytest.fixture
def db():
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


def _service():
    order_repo = MagicMock()
    order_repo.list_all = AsyncMock(return_value=[_order()])
    order_repo.replace_all = AsyncMock()
    raw_repo = MagicMock()
    raw_repo.dump = AsyncMock(side_effect=lambda db, name: [{"id": f"{name}-1"}])
    raw_repo.replace = AsyncMock(side_effect=lambda db, name, rows: len(rows))
    return BackupApplicationService(order_repo=order_repo, raw_repo=raw_repo), order_repo, raw_repo


class TestDecodeOrders:
    def test_decodes(self) -> None:
        orders = decode_orders([order_to_document(_order())])
        assert orders[0] == _order()

    def test_reports_index_of_bad_document(self) -> None:
        good = order_to_document(_order())
        bad = dict(good, status="Desconocido")
        with pytest.raises(ValidationError) as exc_info:
            decode_orders([good, bad])
        assert exc_info.value.field == "orders[1]"


class TestExport:
    @pytest.mark.asyncio
    async def test_includes_every_collection(self, db) -> None:
        svc, _, _ = _service()
        doc = await svc.export(db)
        assert doc.orders[0]["id"] == "ord_1"
        assert doc.orders[0]["legal"]["company_name"] == "JO-SERVICE"
        for name in RAW_COLLECTIONS:
            assert getattr(doc, name) == [{"id": f"{name}-1"}]
        assert doc.backup_date.tzinfo is not None


class TestRestore:
    @pytest.mark.asyncio
    async def test_replaces_everything_in_one_commit(self, db) -> None:
        svc, order_repo, raw_repo = _service()
        document = BackupDocument(
            backup_date=datetime(2026, 3, 5, tzinfo=UTC),
            orders=[order_to_document(_order())],
            clients=[{"id": "cli-1", "name": "Eva"}],
        )
        resp = await svc.restore(db, document, ACTOR)
        assert resp.restored["orders"] == 1
        assert resp.restored["clients"] == 1
        assert resp.restored["parts"] == 0
        assert raw_repo.replace.await_count == len(RAW_COLLECTIONS)
        order_repo.replace_all.assert_awaited_once()
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_malformed_order_writes_nothing(self, db) -> None:
        svc, order_repo, raw_repo = _service()
        document = BackupDocument(
            backup_date=datetime(2026, 3, 5, tzinfo=UTC),
            orders=[{"id": "ord_1"}],
        )
        with pytest.raises(ValidationError):
            await svc.restore(db, document, ACTOR)
        raw_repo.replace.assert_not_awaited()
        order_repo.replace_all.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_rolls_back(self, db) -> None:
        svc, order_repo, _ = _service()
        order_repo.replace_all = AsyncMock(side_effect=RuntimeError("db down"))
        document = BackupDocument(backup_date=datetime(2026, 3, 5, tzinfo=UTC))
        with pytest.raises(RuntimeError):
            await svc.restore(db, document, ACTOR)
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestRawCollectionRepository:
    @pytest.mark.asyncio
    async def test_unknown_collection_rejected(self) -> None:
        with pytest.raises(ValueError):
            await RawCollectionRepository().dump(AsyncMock(), "orders; DROP TABLE x")

    @pytest.mark.asyncio
    async def test_dump_decodes_text(self) -> None:
        result = MagicMock()
        result.scalar_one.return_value = '[{"id": "s1"}]'
        db = AsyncMock()
        db.execute.return_value = result
        assert await RawCollectionRepository().dump(db, "suppliers") == [{"id": "s1"}]

    @pytest.mark.asyncio
    async def test_replace_empty_only_deletes(self) -> None:
        db = AsyncMock()
        assert await RawCollectionRepository().replace(db, "users", []) == 0
        db.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_replace_inserts_rows(self) -> None:
        db = AsyncMock()
        rows = [{"id": "n1", "user_id": "u1", "message": "hola"}]
        assert await RawCollectionRepository().replace(db, "notifications", rows) == 1
        sql, params = db.execute.call_args.args
        assert "jsonb_populate_recordset(NULL::notifications" in str(sql)
        assert '"message": "hola"' in params["rows"]
