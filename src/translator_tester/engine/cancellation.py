"""
Cancellation signal shared between the runner and translator code.

Translator functions may run in a worker thread, where task cancellation
cannot reach them; they observe this signal through every capability call
instead.
"""

import threading
from collections.abc import Callable

from translator_tester.domain.errors import ErrorCodes, TranslationAborted


class AbortSignal:
    """Thread-safe, one-shot abort flag with a reason."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: str | None = None
        self._listeners: list[Callable[[str], None]] = []

    @property
    def aborted(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def abort(self, reason: str = "Aborted") -> None:
        """Fire the signal. Later calls are ignored."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            listeners = list(self._listeners)

        for listener in listeners:
            listener(reason)

    def add_listener(self, listener: Callable[[str], None]) -> None:
        """Call ``listener(reason)`` on abort (immediately if already aborted)."""
        with self._lock:
            if not self._event.is_set():
                self._listeners.append(listener)
                return
        listener(self._reason or "Aborted")

    def raise_if_aborted(self) -> None:
        """
        Raises:
            TranslationAborted: If the signal has fired
        """
        if self._event.is_set():
            raise TranslationAborted(ErrorCodes.ABORTED, self._reason or "Aborted")
