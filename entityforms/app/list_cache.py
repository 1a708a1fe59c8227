"""Client-side handle on the latest result of one record list query.

The handle issues the query once when it is constructed and again on every
:meth:`ListCache.refresh`. Fetches run one at a time in the order they were
requested, so the most recently requested refresh is always the last one
applied. A refresh requested after a successful create therefore ends with a
list that includes that create.

The blocking fetch callable runs in a worker thread; everything else runs on
the event loop that constructed the handle.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Set, Tuple

from ..domain.entities import Record
from ..usecases.error_mapping import map_api_error

FetchFn = Callable[[], List[Record]]


class ListState(str, Enum):
    PENDING = "pending"
    READY = "ready"
    ERRORED = "errored"


@dataclass(frozen=True)
class ListSnapshot:
    """Outcome of the latest completed fetch.

    ``records`` keeps the last successful result when a later fetch fails.
    """

    state: ListState = ListState.PENDING
    records: Tuple[Record, ...] = ()
    error: Optional[str] = None


class ListCache:
    """Refreshable cache of one list query."""

    def __init__(self, fetch: FetchFn, *, name: str = "records", autoload: bool = True) -> None:
        self._fetch = fetch
        self.name = name
        self._snapshot = ListSnapshot()
        self._lock = asyncio.Lock()
        self._tasks: Set[asyncio.Task] = set()
        self.refresh_count = 0
        self._log = logging.getLogger(__name__)
        if autoload:
            self.refresh()

    def current(self) -> ListSnapshot:
        return self._snapshot

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._snapshot.records

    @property
    def state(self) -> ListState:
        return self._snapshot.state

    def refresh(self) -> asyncio.Task:
        """Schedule a re-fetch of the query and return its task.

        Raises:
            RuntimeError: If called outside a running event loop.
        """
        loop = asyncio.get_running_loop()
        self.refresh_count += 1
        task = loop.create_task(self._reload(), name=f"refresh-{self.name}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> ListSnapshot:
        """Wait for every refresh requested so far and return the snapshot."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
        return self._snapshot

    async def _reload(self) -> None:
        async with self._lock:
            try:
                records = await asyncio.to_thread(self._fetch)
            except Exception as exc:
                mapped = map_api_error(
                    exc,
                    default_code="LIST_FAILED",
                    default_message="Failed to load records.",
                )
                self._log.warning("Refreshing %s failed (%s): %s", self.name, mapped.code, mapped.message)
                self._snapshot = ListSnapshot(
                    state=ListState.ERRORED,
                    records=self._snapshot.records,
                    error=mapped.message,
                )
                return
            self._snapshot = ListSnapshot(state=ListState.READY, records=tuple(records or ()))
            self._log.debug("Refreshed %s: %d record(s)", self.name, len(self._snapshot.records))


__all__ = ["ListCache", "ListSnapshot", "ListState"]
