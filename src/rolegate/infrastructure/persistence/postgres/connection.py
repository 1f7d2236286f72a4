"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool

from rolegate.config import Settings


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Create async connection pool sized from settings.

    The pool starts closed; PoolLifespanMiddleware opens it on ASGI startup.
    """
    return AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
        open=False,
    )
