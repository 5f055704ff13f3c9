"""Alembic environment: async engine, raw-SQL revisions.

The ORM reference models are registered as target metadata so `alembic check`
reports drift between them and the migrated schema. Tables that only exist
for backup/restore have no ORM model and are left out of the comparison.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.ext.asyncio import create_async_engine

from config.settings import settings
from src.rs_branch.infrastructure import db_models as _branch_models  # noqa: F401
from src.rs_common.database import Base
from src.rs_inventory.infrastructure import db_models as _inventory_models  # noqa: F401
from src.rs_order.infrastructure import db_models as _order_models  # noqa: F401
from src.rs_print.infrastructure import db_models as _client_models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

BACKUP_ONLY_TABLES = frozenset({"suppliers", "users", "notifications"})


def include_object(obj, name, type_, reflected, compare_to):  # type: ignore[no-untyped-def]
    if type_ == "table" and name in BACKUP_ONLY_TABLES:
        return False
    return True


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (emit SQL only)."""
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        include_object=include_object,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):  # type: ignore[no-untyped-def]
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        include_object=include_object,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = create_async_engine(settings.DATABASE_URL)
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
