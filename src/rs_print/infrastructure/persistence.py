"""ClientDirectory — read-only raw SQL over the clients table."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_print.domain.models import ClientInfo

_GET_CLIENT_SQL = text("""
    SELECT id, name, last_name, dni, phone, email, address
    FROM clients WHERE id = :id
""")


class ClientDirectory:
    async def get_by_id(self, db: AsyncSession, client_id: str) -> ClientInfo | None:
        result = await db.execute(_GET_CLIENT_SQL, {"id": client_id})
        row = result.fetchone()
        if row is None:
            return None
        return ClientInfo(
            id=row.id,
            name=row.name,
            last_name=row.last_name,
            dni=row.dni,
            phone=row.phone,
            email=row.email,
            address=row.address,
        )
