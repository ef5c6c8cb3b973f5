"""
Operation-scoped database sessions.

Sessions are acquired per operation and released as soon as it finishes,
unless an enclosing ``transaction()`` already holds one.

Usage:
    # Single operation - acquires, commits and releases
    async with get_session() as session:
        result = await session.execute(query)

    # Several operations sharing one session, committed together
    async with transaction():
        await repo.create(first)
        await repo.create(second)
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from common.core.otel_exporter import get_logger
from common.db.session import AsyncSessionLocal, AsyncSessionLocalReadonly
from common.db.context import (
    get_current_session,
    set_current_session,
    reset_current_session,
)

logger = get_logger(__name__)


@asynccontextmanager
async def transaction(readonly: bool = False) -> AsyncGenerator[AsyncSession, None]:
    """
    Explicit transaction boundary.

    All DB operations inside share one session. Commits on success
    (unless readonly), rolls back and re-raises on exception.
    """
    session_factory = AsyncSessionLocalReadonly if readonly else AsyncSessionLocal

    async with session_factory() as session:
        token = set_current_session(session, readonly=readonly)
        try:
            yield session
            if not readonly:
                start = time.perf_counter()
                await session.commit()
                logger.debug(
                    f"Transaction commit: {(time.perf_counter() - start) * 1000:.2f}ms"
                )
        except Exception as e:
            logger.error(f"Transaction rollback due to: {e}")
            await session.rollback()
            raise
        finally:
            reset_current_session(token, readonly=readonly)


@asynccontextmanager
async def get_session(readonly: bool = False) -> AsyncGenerator[AsyncSession, None]:
    """
    Get a session for a single DB operation.

    Reuses the session of an enclosing ``transaction()`` (which then owns the
    commit). Otherwise acquires a new session, commits unless readonly, and
    releases it on exit.
    """
    existing = get_current_session(readonly=readonly)

    if existing:
        logger.debug("Reusing existing transaction session")
        yield existing
        return

    session_factory = AsyncSessionLocalReadonly if readonly else AsyncSessionLocal

    start = time.perf_counter()
    async with session_factory() as session:
        logger.debug(
            f"Operation session acquire: {(time.perf_counter() - start) * 1000:.2f}ms, readonly={readonly}"
        )
        try:
            yield session
            if not readonly:
                await session.commit()
        except Exception as e:
            logger.error(f"Operation rollback due to: {e}")
            await session.rollback()
            raise
