"""Commit-on-success / rollback-on-failure boundary for a transaction.

Example:
    >>> import sqlite3
    >>> conn = sqlite3.connect(":memory:")
    >>> with UnitOfWork(conn) as uow:
    ...     _ = conn.execute("CREATE TABLE t (x)")
    >>> uow.state
    <TransactionState.COMMITTED: 'committed'>
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contentstash.core.exceptions import (
    CommitError,
    RollbackError,
    TransactionStateError,
)
from contentstash.core.models import TransactionState


if TYPE_CHECKING:
    from types import TracebackType

    from contentstash.core.ports import TransactionHandle


logger = logging.getLogger(__name__)


def finalize(
    handle: TransactionHandle, error: BaseException | None
) -> BaseException | None:
    """Commit or roll back depending on the accumulated error.

    Exactly one of commit() and rollback() is called.

    Args:
        handle: The transaction to retire.
        error: The operation's error so far, or None on success.

    Returns:
        None if the commit succeeded, the original error if the rollback
        succeeded, a CommitError if the commit failed, or a RollbackError
        wrapping both causes if the rollback failed.
    """
    if error is not None:
        try:
            handle.rollback()
        except Exception as rollback_error:
            logger.error(
                "failed to rollback transaction: %s (original error: %s)",
                rollback_error,
                error,
            )
            return RollbackError(cause=error, rollback_error=rollback_error)
        return error

    try:
        handle.commit()
    except Exception as commit_error:
        return CommitError(commit_error)
    return None


class UnitOfWork:
    """Context manager that finalizes a transaction on every exit path.

    An exception escaping the block, or an error recorded with fail(), rolls
    the transaction back; a clean exit commits it. Finalization errors are
    raised from __exit__. An exception escaping the block takes precedence
    over an error recorded with fail(); the recorded one is added as a note.

    Attributes:
        state: Current TransactionState.
        error: The final error after exit, or the error recorded so far.
    """

    def __init__(self, handle: TransactionHandle) -> None:
        self._handle = handle
        self._entered = False
        self.state = TransactionState.OPEN
        self.error: BaseException | None = None

    def fail(self, error: BaseException) -> None:
        """Record an error without raising; the block will roll back on exit."""
        if self.state.is_terminal:
            raise TransactionStateError("unit of work is already finalized")
        self.error = error

    def __enter__(self) -> UnitOfWork:
        if self._entered or self.state.is_terminal:
            raise TransactionStateError("unit of work can't be reused")
        self._entered = True
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        if self.state.is_terminal:
            raise TransactionStateError("unit of work is already finalized")

        original = exc_val if exc_val is not None else self.error
        recorded = self.error
        if exc_val is not None and recorded is not None and recorded is not exc_val:
            exc_val.add_note(f"recorded failure superseded: {recorded!r}")
        outcome = finalize(self._handle, original)
        self.error = outcome

        if original is None:
            if outcome is None:
                self.state = TransactionState.COMMITTED
                return False
            self.state = TransactionState.COMMIT_FAILED
            raise outcome from getattr(outcome, "cause", None)

        if outcome is original:
            self.state = TransactionState.ROLLED_BACK
            if exc_val is not None:
                return False
            raise original

        self.state = TransactionState.ROLLBACK_FAILED
        assert outcome is not None
        raise outcome from original
