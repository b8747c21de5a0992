"""One-shot cooperative cancellation signal.

A :class:`CancellationToken` is consulted exactly once, right before a
blocking send starts. It never interrupts work that is already running.
"""

from __future__ import annotations

import threading
import time

from .errors import DeadlineExceededError, OperationCancelledError


class CancellationToken:
    """Thread-safe cancel flag that carries the reason it was triggered.

    Example:
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.cancel()
        >>> token.cancelled
        True
        >>> type(token.reason).__name__
        'OperationCancelledError'
    """

    def __init__(self, *, deadline: float | None = None) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: BaseException | None = None
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> CancellationToken:
        """Create a token that reports itself cancelled once ``seconds`` elapse.

        Example:
            >>> CancellationToken.with_timeout(0).cancelled
            True
        """
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self, reason: BaseException | None = None) -> None:
        """Trigger the token; the first reason recorded wins.

        Args:
            reason: Exception handed back to whoever checks the token.
                Defaults to :class:`OperationCancelledError`.
        """
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason if reason is not None else OperationCancelledError()
            self._event.set()

    def _expire_if_due(self) -> None:
        if self._deadline is not None and not self._event.is_set() and time.monotonic() >= self._deadline:
            self.cancel(DeadlineExceededError())

    @property
    def cancelled(self) -> bool:
        """Non-blocking check whether the token has been triggered."""
        self._expire_if_due()
        return self._event.is_set()

    @property
    def reason(self) -> BaseException | None:
        """Exception recorded at cancellation time, ``None`` while active."""
        self._expire_if_due()
        return self._reason

    def raise_if_cancelled(self) -> None:
        """Raise the recorded reason verbatim when the token was triggered.

        Raises:
            BaseException: Whatever reason the token was cancelled with.
        """
        reason = self.reason
        if reason is not None:
            raise reason


__all__ = ["CancellationToken"]
