"""
Account context management using contextvars.

Every client operation runs inside `account_context(<id>)` so log lines
emitted anywhere below it carry the account the call is scoped to, without
passing the ID around.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_account_context: ContextVar[str | None] = ContextVar("account_id", default=None)


def get_current_account_context() -> str | None:
    """
    Get the current account ID from context variables.

    Returns:
        Current WABA ID, phone number ID or media ID, or None if not set
    """
    return _account_context.get()


def set_account_context(account_id: str | None) -> None:
    """Set the account context for the current async context."""
    _account_context.set(account_id)


def clear_account_context() -> None:
    """Clear the account context."""
    _account_context.set(None)


@contextmanager
def account_context(account_id: str | None) -> Iterator[None]:
    """Scope the account context to a block, restoring the previous value on exit."""
    token = _account_context.set(account_id)
    try:
        yield
    finally:
        _account_context.reset(token)
