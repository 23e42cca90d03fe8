from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from .matching import GlossaryMatcher, MatchCandidate, SearchOrigin

logger = logging.getLogger(__name__)


class ContextWatcher:
    """
    Drives passive (auto) searches for a changing piece of context text.

    ``observe`` records the latest text; ``poll`` runs a single auto search once
    that text has stayed unchanged for ``settle_seconds`` and differs from the
    last text searched. Newer text supersedes a pending one, so the matcher is
    called at most once per settled change.
    """

    def __init__(
        self,
        matcher: GlossaryMatcher,
        *,
        settle_seconds: float = 1.5,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.matcher = matcher
        self.settle_seconds = settle_seconds
        self._clock = clock
        self._pending: str | None = None
        self._pending_since = 0.0
        self._last_searched: str | None = None

    @property
    def last_searched(self) -> str | None:
        return self._last_searched

    def observe(self, text: str | None) -> None:
        current = (text or "").strip()
        if current == self._pending:
            return
        self._pending = current
        self._pending_since = self._clock()

    def poll(self) -> list[MatchCandidate] | None:
        if self._pending is None or not self._pending:
            return None
        if self._pending == self._last_searched:
            return None
        if self._clock() - self._pending_since < self.settle_seconds:
            return None
        self._last_searched = self._pending
        logger.debug(f"Context text settled ({len(self._pending)} chars), running auto search")
        return self.matcher.search(self._pending, SearchOrigin.AUTO)

    def run(
        self,
        read_text: Callable[[], str | None],
        on_results: Callable[[list[MatchCandidate]], None],
        stop: threading.Event,
        *,
        interval: float = 0.25,
    ) -> None:
        """Poll ``read_text`` until ``stop`` is set, reporting each settled search."""
        while not stop.is_set():
            self.observe(read_text())
            results = self.poll()
            if results is not None:
                on_results(results)
            stop.wait(interval)
