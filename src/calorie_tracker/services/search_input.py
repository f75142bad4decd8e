"""Debounced search-as-you-type handling."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from calorie_tracker.domain.nutrition import FoodSearchResult
from calorie_tracker.errors import CalorieTrackerError

SEARCH_DEBOUNCE_SECONDS = 0.8
MIN_QUERY_LENGTH = 2

_logger = logging.getLogger(__name__)


class FoodSearcher(Protocol):
    """Anything that can search foods by text."""

    async def search(self, query: str) -> list[FoodSearchResult]:
        """Return foods matching ``query``."""


@dataclass
class ScheduledTask:
    """A single cancellable delayed call on the running event loop."""

    _handle: asyncio.TimerHandle | None = field(default=None, init=False)

    @property
    def pending(self) -> bool:
        """Return True while a call is scheduled and has not fired."""
        return self._handle is not None

    def schedule(self, delay: float, fn: Callable[[], object]) -> None:
        """Run ``fn`` after ``delay`` seconds, replacing any pending call."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay, self._fire, fn)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, fn: Callable[[], object]) -> None:
        self._handle = None
        fn()


@dataclass
class SearchInputHandler:
    """Turns keystrokes into debounced searches.

    Every keystroke bumps a sequence number. A search only delivers its results
    if no newer keystroke arrived while it was in flight.
    """

    searcher: FoodSearcher
    on_results: Callable[[list[FoodSearchResult]], None]
    on_error: Callable[[CalorieTrackerError], None] | None = None
    delay_seconds: float = SEARCH_DEBOUNCE_SECONDS
    min_query_length: int = MIN_QUERY_LENGTH
    timer: ScheduledTask = field(default_factory=ScheduledTask)
    _sequence: int = field(default=0, init=False)
    _tasks: set[asyncio.Task[None]] = field(default_factory=set, init=False)

    def handle_text(self, text: str) -> None:
        """Accept the current contents of the search box."""
        self.timer.cancel()
        self._sequence += 1
        query = text.strip()
        if len(query) < self.min_query_length:
            self.on_results([])
            return
        sequence = self._sequence
        self.timer.schedule(
            self.delay_seconds, lambda: self._start_search(query, sequence)
        )

    async def drain(self) -> None:
        """Wait for searches that are already running."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def close(self) -> None:
        """Cancel the pending timer and ignore in-flight searches."""
        self.timer.cancel()
        self._sequence += 1
        for task in list(self._tasks):
            task.cancel()

    def _start_search(self, query: str, sequence: int) -> None:
        task = asyncio.ensure_future(self._run_search(query, sequence))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_search(self, query: str, sequence: int) -> None:
        try:
            results = await self.searcher.search(query)
        except CalorieTrackerError as exc:
            _logger.warning("Search failed for %r: %s", query, exc.message)
            self._report_failure(sequence, exc)
            return
        except Exception as exc:
            _logger.exception("Unexpected error searching for %r", query)
            self._report_failure(sequence, CalorieTrackerError(f"Search failed: {exc}"))
            return
        if sequence != self._sequence:
            _logger.debug("Discarding stale results for %r", query)
            return
        self.on_results(results)

    def _report_failure(self, sequence: int, error: CalorieTrackerError) -> None:
        if sequence != self._sequence:
            return
        self.on_results([])
        if self.on_error is not None:
            self.on_error(error)
