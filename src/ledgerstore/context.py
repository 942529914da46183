"""
Call context for deadline and cancellation propagation.

A CallContext is passed to store operations to bound how long they may wait
for the shared connection and how long a statement may run. Once the
context is cancelled or its deadline passes, the in-flight SQLite statement
is interrupted and the operation raises OperationCancelledError.

Usage:
    ctx = CallContext.with_timeout(2.0)
    events, total = store.list(RecordQuery(tenant_uuid="t1"), ctx=ctx)

    # From another thread
    ctx.cancel()
"""

from __future__ import annotations

import threading
import time

from ledgerstore.errors import OperationCancelledError


class CallContext:
    """Deadline and cancellation signal for a single store call."""

    def __init__(self, deadline: float | None = None) -> None:
        """
        Args:
            deadline: Absolute ``time.monotonic()`` value after which the
                context counts as expired. None means no deadline.
        """
        self._deadline = deadline
        self._cancelled = threading.Event()

    @classmethod
    def with_timeout(cls, seconds: float) -> CallContext:
        """Create a context that expires ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds)

    @classmethod
    def background(cls) -> CallContext:
        """Context that is never cancelled and has no deadline."""
        return cls()

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def cancel(self) -> None:
        """Cancel the context. Safe to call from any thread."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def done(self) -> bool:
        """True once the context is cancelled or past its deadline."""
        return self.cancelled or self.expired

    def remaining(self) -> float | None:
        """Seconds left until the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def check(self, action: str = "operation") -> None:
        """Raise OperationCancelledError if the context is done."""
        if self.cancelled:
            raise OperationCancelledError(f"{action} cancelled")
        if self.expired:
            raise OperationCancelledError(f"{action} deadline exceeded")
