"""ClientDirectory Protocol — clients are owned elsewhere; print only reads them."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_print.domain.models import ClientInfo


class ClientDirectoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, client_id: str) -> ClientInfo | None: ...
