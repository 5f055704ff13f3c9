"""HTTP-level tests: routing, envelopes, error mapping and actor headers.

Services are patched at the router's module-level instance; the DB session
dependency is overridden so no database is needed.
"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.main import app
from src.rs_common.database import get_db_session
from src.rs_common.errors import InsufficientStockError, OrderNotFoundError
from src.rs_order.application.schemas import (
    AlertListResponse,
    CommentResponse,
    OrderListResponse,
)

HEADERS = {"X-User-Id": "tech-1", "X-User-Name": "Ana"}


async def _fake_session():
    yield MagicMock()


@pytest.fixture(autouse=True)
def _override_db():
    app.dependency_overrides[get_db_session] = _fake_session
    yield
    app.dependency_overrides.pop(get_db_session, None)


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestOrderRoutes:
    @pytest.mark.asyncio
    async def test_mutation_without_actor_is_401(self, client) -> None:
        resp = await client.post("/api/v1/orders/ord_1/comments", json={"description": "x"})
        assert resp.status_code == 401
        assert resp.json()["code"] == 9003

    @pytest.mark.asyncio
    async def test_add_comment_returns_201(self, client) -> None:
        comment = CommentResponse(
            id="cmt_1", user_id="tech-1", user_name="Ana", description="x",
            timestamp="2026-03-01T10:00:00+00:00",
        )
        with patch("src.rs_order.api.router._service") as svc:
            svc.add_comment = AsyncMock(return_value=comment)
            resp = await client.post(
                "/api/v1/orders/ord_1/comments", json={"description": "x"}, headers=HEADERS
            )
        assert resp.status_code == 201
        body = resp.json()
        assert body["code"] == 0
        assert body["data"]["user_name"] == "Ana"
        actor = svc.add_comment.call_args.args[3]
        assert actor.user_id == "tech-1"

    @pytest.mark.asyncio
    async def test_not_found_maps_to_404_with_field(self, client) -> None:
        with patch("src.rs_order.api.router._service") as svc:
            svc.get_order = AsyncMock(side_effect=OrderNotFoundError("ord_x"))
            resp = await client.get("/api/v1/orders/ord_x")
        assert resp.status_code == 404
        body = resp.json()
        assert body["code"] == 2001
        assert body["data"] == {"field": "order_id"}
        assert body["request_id"].startswith("req_")

    @pytest.mark.asyncio
    async def test_insufficient_stock_maps_to_409(self, client) -> None:
        with patch("src.rs_order.api.router._service") as svc:
            svc.add_part = AsyncMock(side_effect=InsufficientStockError("p1", 5, 3))
            resp = await client.post(
                "/api/v1/orders/ord_1/parts",
                json={"part_id": "p1", "quantity": 5},
                headers=HEADERS,
            )
        assert resp.status_code == 409
        assert resp.json()["code"] == 3001

    @pytest.mark.asyncio
    async def test_bad_status_value_is_field_error(self, client) -> None:
        resp = await client.post(
            "/api/v1/orders/ord_1/status", json={"status": "Perdido"}, headers=HEADERS
        )
        assert resp.status_code == 422
        body = resp.json()
        assert body["code"] == 1000
        assert body["data"] == {"field": "status"}

    @pytest.mark.asyncio
    async def test_alerts_route_not_shadowed_by_order_id(self, client) -> None:
        with patch("src.rs_order.api.router._service") as svc:
            svc.list_alerts = AsyncMock(return_value=AlertListResponse(items=[], total=0))
            resp = await client.get("/api/v1/orders/alerts", params={"branch_id": "br-1"})
        assert resp.status_code == 200
        svc.list_alerts.assert_awaited_once()
        assert svc.list_alerts.call_args.args[1] == "br-1"

    @pytest.mark.asyncio
    async def test_list_search_filters_reach_service(self, client) -> None:
        with patch("src.rs_order.api.router._service") as svc:
            svc.list_orders = AsyncMock(
                return_value=OrderListResponse(items=[], next_cursor=None, has_more=False)
            )
            resp = await client.get(
                "/api/v1/orders", params={"order_number": "ORD0", "imei": "3569"}
            )
        assert resp.status_code == 200
        kwargs = svc.list_orders.call_args.kwargs
        assert kwargs["order_number"] == "ORD0"
        assert kwargs["imei"] == "3569"


class TestPrintRoute:
    @pytest.mark.asyncio
    async def test_returns_html(self, client) -> None:
        with patch("src.rs_print.api.router._service") as svc:
            svc.render = AsyncMock(return_value="<html>ORD001</html>")
            resp = await client.get("/api/v1/print/customer-voucher/ord_1")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "ORD001" in resp.text

    @pytest.mark.asyncio
    async def test_unknown_variant(self, client) -> None:
        resp = await client.get("/api/v1/print/receipt/ord_1")
        assert resp.status_code == 422
