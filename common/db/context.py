"""
Session context for the current task.

Holds the session of an enclosing ``transaction()`` block so repository
calls made inside it join that session instead of opening their own.
"""

from contextvars import ContextVar, Token
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

# Current write session (inside a write transaction)
_write_session: ContextVar[Optional[AsyncSession]] = ContextVar(
    "db_write_session", default=None
)

# Current read session (inside a readonly transaction)
_read_session: ContextVar[Optional[AsyncSession]] = ContextVar(
    "db_read_session", default=None
)


def get_current_session(readonly: bool = False) -> Optional[AsyncSession]:
    """Get the session of the enclosing transaction, if any."""
    if readonly:
        # A write transaction also serves reads so they see its uncommitted rows
        return _read_session.get() or _write_session.get()
    return _write_session.get()


def set_current_session(session: AsyncSession, readonly: bool = False) -> Token:
    if readonly:
        return _read_session.set(session)
    return _write_session.set(session)


def reset_current_session(token: Token, readonly: bool = False) -> None:
    if readonly:
        _read_session.reset(token)
    else:
        _write_session.reset(token)


def in_transaction(readonly: bool = False) -> bool:
    """Check if we're currently inside a transaction."""
    return get_current_session(readonly=readonly) is not None
