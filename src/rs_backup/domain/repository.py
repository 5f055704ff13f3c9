"""Raw collection access for backup export / restore."""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

# Collections copied verbatim; orders go through the order codec instead.
RAW_COLLECTIONS: tuple[str, ...] = (
    "clients",
    "parts",
    "suppliers",
    "branches",
    "users",
    "notifications",
)


class RawCollectionRepositoryProtocol(Protocol):
    async def dump(self, db: AsyncSession, collection: str) -> list[dict[str, Any]]: ...

    async def replace(
        self, db: AsyncSession, collection: str, rows: list[dict[str, Any]]
    ) -> int: ...
