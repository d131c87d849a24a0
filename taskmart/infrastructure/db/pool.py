from __future__ import annotations

from typing import Optional
from psycopg_pool import AsyncConnectionPool
from taskmart.settings import get_settings

_pool: Optional[AsyncConnectionPool] = None


def get_pool() -> AsyncConnectionPool:
    """
    Create (if needed) and return the global pool WITHOUT opening it.
    The app lifespan opens it; request handlers only borrow connections.
    """
    global _pool
    if _pool is None:
        settings = get_settings()
        _pool = AsyncConnectionPool(
            settings.database_url,
            min_size=1,
            max_size=settings.db_pool_max_size,
            timeout=5,
            open=False,
        )
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
