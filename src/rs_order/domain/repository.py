"""Order persistence contracts — the domain and services depend only on these."""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_common.enums import OrderStatus
from src.rs_order.domain.models import Order, OrderComment


class OrderRepositoryProtocol(Protocol):
    async def next_order_number(self, db: AsyncSession) -> int: ...

    async def save(self, db: AsyncSession, order: Order) -> None:
        """Insert a new order, including its legal snapshot."""
        ...

    async def update(self, db: AsyncSession, order: Order) -> None:
        """Write mutable fields. Never writes legal snapshot or comments."""
        ...

    async def append_comment(
        self, db: AsyncSession, order_id: str, comment: OrderComment, now: datetime
    ) -> None: ...

    async def get_by_id(self, db: AsyncSession, order_id: str) -> Order | None: ...

    async def get_for_update(self, db: AsyncSession, order_id: str) -> Order | None:
        """Load and row-lock the order until the transaction ends."""
        ...

    async def list_orders(
        self,
        db: AsyncSession,
        branch_id: str | None,
        statuses: list[OrderStatus] | None,
        client_id: str | None,
        cursor_id: str | None,
        limit: int,
        order_number: str | None = None,
        imei: str | None = None,
    ) -> list[Order]: ...

    async def list_open(self, db: AsyncSession, branch_id: str | None) -> list[Order]: ...

    async def list_all(self, db: AsyncSession) -> list[Order]: ...

    async def replace_all(self, db: AsyncSession, orders: list[Order]) -> None: ...
