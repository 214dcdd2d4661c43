"""
Connection pools for the two database roles.

The admin pool owns schema creation and inserts; the guest pool runs
caller-supplied SQL. Both are created once in the app lifespan and handed
to route handlers through the `get_pools` dependency.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator

from fastapi import Request
from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import AsyncAdaptedQueuePool

from gateway.config import Settings
from gateway.exceptions import PoolsNotInitializedError
from gateway.utils.logger import get_logger

logger = get_logger(__name__)

ADMIN = "admin"
GUEST = "guest"


class Base(DeclarativeBase):
    pass


async def execute_raw(conn: AsyncConnection, statement: str) -> list[dict[str, Any]]:
    """
    Run caller text verbatim and return its rows as column -> value dicts.

    `no_parameters` keeps pyformat drivers from treating `%` in the text as a
    placeholder. Statements without a result set return an empty list.
    """
    result = await conn.exec_driver_sql(statement, execution_options={"no_parameters": True})
    rows: list[dict[str, Any]] = []
    if result.returns_rows:
        keys = list(result.keys())
        rows = [dict(zip(keys, row)) for row in result.fetchall()]
    await conn.commit()
    return rows


class RolePool:
    """One credential set and its pool of live connections."""

    def __init__(self, role: str, engine: AsyncEngine):
        self.role = role
        self.engine = engine

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        # Closing the connection returns it to the pool, rolling back anything uncommitted.
        async with self.engine.connect() as conn:
            yield conn

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncConnection]:
        async with self.engine.begin() as conn:
            yield conn

    async def query(self, statement: str) -> list[dict[str, Any]]:
        async with self.connection() as conn:
            return await execute_raw(conn, statement)

    async def dispose(self) -> None:
        await self.engine.dispose()


def _create_engine(url: URL, pool_size: int) -> AsyncEngine:
    # Explicit pool class so file-backed SQLite gets a bounded checkout pool too.
    return create_async_engine(
        url,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=pool_size,
        max_overflow=0,
        echo=False,
    )


@dataclass
class DatabasePools:
    admin: RolePool
    guest: RolePool

    @classmethod
    def create(cls, settings: Settings) -> "DatabasePools":
        pools = cls(
            admin=RolePool(ADMIN, _create_engine(settings.admin_url(), settings.db_pool_size)),
            guest=RolePool(GUEST, _create_engine(settings.guest_url(), settings.db_pool_size)),
        )
        logger.info(
            "Database pools created (admin=%s, guest=%s)",
            settings.admin_url().render_as_string(hide_password=True),
            settings.guest_url().render_as_string(hide_password=True),
        )
        return pools

    def pool(self, name: str) -> RolePool:
        if name == ADMIN:
            return self.admin
        if name == GUEST:
            return self.guest
        raise KeyError(f"Unknown pool: {name}")

    async def verify(self) -> None:
        """Open one connection per role; any failure propagates and aborts startup."""
        for role_pool in (self.admin, self.guest):
            await role_pool.query("SELECT 1")
            logger.info("Connected to database as %s role", role_pool.role)

    async def dispose(self) -> None:
        await self.admin.dispose()
        await self.guest.dispose()
        logger.info("Database pools closed.")


def get_pools(request: Request) -> DatabasePools:
    """FastAPI dependency: the pools created by the app lifespan."""
    pools = getattr(request.app.state, "pools", None)
    if pools is None:
        raise PoolsNotInitializedError()
    return pools
