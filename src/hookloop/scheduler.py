"""Scheduler — coalesces any number of writes into one deferred flush per tick.

A single pending flag gates the host's after() primitive. The flag is cleared
before effects run, so a write made by an effect schedules a fresh flush
instead of being absorbed into the one in progress.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from hookloop.host import Host

logger = logging.getLogger("hookloop.scheduler")


class Scheduler:
    def __init__(self, host: Host, evaluate: Callable[[], Any], delay: float = 0.0) -> None:
        self._host = host
        self._evaluate = evaluate
        self._delay = delay
        self._pending = False
        self.flush_count = 0

    @property
    def pending(self) -> bool:
        return self._pending

    def request_flush(self) -> None:
        """Schedule a flush unless one is already outstanding."""
        if self._pending:
            return
        self._pending = True
        logger.debug("flush scheduled (delay=%s)", self._delay)
        self._host.after(self._delay, self.flush)

    def flush(self) -> None:
        """Run one evaluation pass. Callback failures propagate."""
        self._pending = False
        self.flush_count += 1
        ran = self._evaluate()
        logger.debug("flush #%d ran %s effects", self.flush_count, ran)
