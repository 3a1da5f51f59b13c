# backend/app/utils/debounce.py

"""
Live-search plumbing: a cancellable timer and a request-generation token.

A keystroke restarts the 300 ms window; when the window closes the
search runs, and its result is dropped if newer input arrived while it
was in flight.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, List, Optional, Union

from app.core.logger import logger


SEARCH_DEBOUNCE_SECONDS = 0.3


class CancellableTimer:
    """Runs ``callback`` once, ``delay`` seconds after the last ``schedule()``."""

    def __init__(self, delay: float, callback: Callable[[], Union[None, Awaitable[None]]]):
        self.delay = delay
        self.callback = callback
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        result = self.callback()
        if inspect.isawaitable(result):
            await result


class RequestGeneration:
    """Monotonic token; only the latest issued token is current."""

    def __init__(self):
        self._current = 0

    def next(self) -> int:
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current

    def invalidate(self) -> None:
        self._current += 1


class DebouncedSearch:
    """
    One live search box.

    ``search_fn(query)`` is awaited after the debounce window;
    ``on_results(items)`` receives its result unless newer input (or
    ``close()``) superseded it. Blank input clears the results at once.
    """

    def __init__(
        self,
        search_fn: Callable[[str], Awaitable[List[Any]]],
        on_results: Callable[[List[Any]], None],
        delay: float = SEARCH_DEBOUNCE_SECONDS,
    ):
        self.search_fn = search_fn
        self.on_results = on_results
        self.generation = RequestGeneration()
        self._query = ""
        self._timer = CancellableTimer(delay, self._fire)

    def input(self, text: str) -> None:
        self._query = (text or "").strip()
        token = self.generation.next()
        self._timer.cancel()
        if not self._query:
            self.on_results([])
            return
        logger.debug(f"Search input '{self._query}' (generation {token})")
        self._timer.schedule()

    async def _fire(self) -> None:
        token = self.generation.next()
        query = self._query
        try:
            items = await self.search_fn(query)
        except Exception as e:
            logger.warning(f"Live search for '{query}' failed: {e}")
            items = []
        if not self.generation.is_current(token):
            logger.debug(f"Dropping stale results for '{query}'")
            return
        self.on_results(items)

    def close(self) -> None:
        self._timer.cancel()
        self.generation.invalidate()
