"""PrintApplicationService — loads one PrintSource and renders a variant."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_branch.domain.repository import BranchRepositoryProtocol
from src.rs_branch.infrastructure.persistence import BranchRepository
from src.rs_common.enums import DocumentVariant
from src.rs_common.errors import ClientNotFoundError, OrderNotFoundError
from src.rs_order.domain.repository import OrderRepositoryProtocol
from src.rs_order.infrastructure.persistence import OrderRepository
from src.rs_print.application.renderer import render_document
from src.rs_print.domain.models import PrintSource
from src.rs_print.domain.repository import ClientDirectoryProtocol
from src.rs_print.infrastructure.persistence import ClientDirectory


class PrintApplicationService:
    def __init__(
        self,
        order_repo: OrderRepositoryProtocol | None = None,
        client_directory: ClientDirectoryProtocol | None = None,
        branch_repo: BranchRepositoryProtocol | None = None,
    ) -> None:
        self._order_repo: OrderRepositoryProtocol = order_repo or OrderRepository()
        self._clients: ClientDirectoryProtocol = client_directory or ClientDirectory()
        self._branch_repo: BranchRepositoryProtocol = branch_repo or BranchRepository()

    async def load_source(self, db: AsyncSession, order_id: str) -> PrintSource:
        order = await self._order_repo.get_by_id(db, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        client = await self._clients.get_by_id(db, order.client_id)
        if client is None:
            raise ClientNotFoundError(order.client_id)
        # Branch may have been removed since intake; the snapshot still prints.
        branch = await self._branch_repo.get_by_id(db, order.branch_id)
        return PrintSource(
            order=order,
            client=client,
            live_settings=branch.settings if branch else None,
        )

    async def render(self, db: AsyncSession, variant: DocumentVariant, order_id: str) -> str:
        source = await self.load_source(db, order_id)
        return render_document(variant, source)
