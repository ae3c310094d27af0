"""Per-request SQLAlchemy engines built from connection descriptors.

There is no application-wide engine: each request brings its own database
URL, so engines are created on demand without pooling and disposed when the
request finishes.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from rag_tutorial.domain.entities import ConnectionDescriptor
from rag_tutorial.domain.exceptions import InvalidConnectionError

_ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
}


def _get_async_url(raw: str) -> URL:
    """Convert a sync SQLAlchemy URL to an async one.

    Hosted providers hand out libpq-style URLs with ``sslmode``; asyncpg
    expects ``ssl`` instead.
    """
    try:
        url = make_url(raw)
    except ArgumentError as exc:
        raise InvalidConnectionError(f"Invalid database URL: {exc}") from exc

    driver = _ASYNC_DRIVERS.get(url.drivername)
    if driver is not None:
        url = url.set(drivername=driver)

    sslmode = url.query.get("sslmode")
    if sslmode and url.drivername.endswith("+asyncpg"):
        url = url.difference_update_query(["sslmode"]).update_query_dict({"ssl": sslmode})
    return url


def create_engine_for(descriptor: ConnectionDescriptor) -> AsyncEngine:
    """Build an unpooled async engine for one descriptor."""
    url = _get_async_url(descriptor.url)
    try:
        return create_async_engine(url, poolclass=NullPool, future=True)
    except (SQLAlchemyError, ImportError) as exc:
        raise InvalidConnectionError(
            f"Unsupported database URL scheme '{url.drivername}': {exc}"
        ) from exc


@asynccontextmanager
async def open_engine(descriptor: ConnectionDescriptor) -> AsyncIterator[AsyncEngine]:
    """Yield an engine for ``descriptor`` and dispose it afterwards."""
    engine = create_engine_for(descriptor)
    try:
        yield engine
    finally:
        await engine.dispose()
