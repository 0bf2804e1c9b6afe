"""Interrupt isolation: keep Ctrl-C away from environment setup and cleanup.

Two scoped modes share one :class:`InterruptIsolation` object:

* :meth:`InterruptIsolation.isolate` swallows SIGINT entirely for its block.
  Nothing is queued or redelivered afterwards.
* :meth:`InterruptIsolation.deferred` lets SIGINT through for its block. The
  signal surfaces inside the block as :class:`HookInterrupted`, and the object
  switches back to isolating before the exception leaves the signal handler,
  so the code handling it cannot itself be interrupted.

Both restore the previous state on every exit path.
"""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class HookInterrupted(KeyboardInterrupt):
    """Cancellation raised into a hook when the user presses Ctrl-C.

    Derives from KeyboardInterrupt, not Exception, so fault handlers written
    as ``except Exception`` never swallow it.
    """


class InterruptIsolation:
    def __init__(self, signum: int = signal.SIGINT) -> None:
        self.signum = signum
        self.isolated = False
        self.signals_received = 0
        self._reenable_on_interrupt = False
        self._installed = False
        self._previous_handler = None

    def _handle(self, signum, frame) -> None:
        if self.isolated:
            self.signals_received += 1
            logger.debug("ignoring signal %d while isolated", signum)
            return
        if self._reenable_on_interrupt:
            self._reenable_on_interrupt = False
            self.isolated = True
        raise HookInterrupted()

    def _install(self) -> bool:
        if self._installed:
            return False
        if threading.current_thread() is not threading.main_thread():
            logger.debug("not on the main thread; signal handler not installed")
            return False
        self._previous_handler = signal.signal(self.signum, self._handle)
        self._installed = True
        return True

    def _uninstall(self) -> None:
        previous = self._previous_handler
        signal.signal(self.signum, signal.default_int_handler if previous is None else previous)
        self._previous_handler = None
        self._installed = False

    @contextmanager
    def isolate(self) -> Iterator[InterruptIsolation]:
        """Suppress the signal for the duration of the block."""
        installed = self._install()
        prior = (self.isolated, self._reenable_on_interrupt)
        self.isolated = True
        self._reenable_on_interrupt = False
        try:
            yield self
        finally:
            self.isolated, self._reenable_on_interrupt = prior
            if installed:
                self._uninstall()
            if self.signals_received:
                logger.debug("%d signal(s) suppressed during isolation", self.signals_received)
                self.signals_received = 0

    @contextmanager
    def deferred(self) -> Iterator[InterruptIsolation]:
        """Deliver the signal to the block as HookInterrupted."""
        installed = self._install()
        prior = (self.isolated, self._reenable_on_interrupt)
        self.isolated = False
        self._reenable_on_interrupt = True
        try:
            yield self
        finally:
            self.isolated, self._reenable_on_interrupt = prior
            if installed:
                self._uninstall()


# process-wide default; signal disposition is per process
default_isolation = InterruptIsolation()
