"""In-memory query cache keyed by hierarchical tuples.

Keys are tuples such as ``("events", "detail", "<id>")``; every operation that
takes a ``prefix`` applies to all keys starting with that prefix. Filters
inside keys are stored as sorted ``(name, value)`` tuples so keys stay
hashable.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

QueryKey = tuple[Any, ...]
Fetcher = Callable[[], Awaitable[Any]]

_MISSING = object()


def freeze(filters: Mapping[str, Any]) -> tuple[tuple[str, Any], ...]:
    return tuple(sorted(filters.items()))


def matches(key: QueryKey, prefix: QueryKey) -> bool:
    return key[: len(prefix)] == prefix


@dataclass
class _Entry:
    data: Any = _MISSING
    updated_at: float = 0.0
    stale: bool = True
    task: asyncio.Task | None = None

    @property
    def has_data(self) -> bool:
        return self.data is not _MISSING


@dataclass(frozen=True)
class CacheSnapshot:
    entries: dict[QueryKey, Any]


class QueryCache:
    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[QueryKey, _Entry] = {}
        self._clock = clock

    def __contains__(self, key: QueryKey) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.has_data

    def keys(self, prefix: QueryKey = ()) -> list[QueryKey]:
        return [key for key in self._entries if matches(key, prefix)]

    def is_stale(self, key: QueryKey, stale_time: float = 0.0) -> bool:
        entry = self._entries.get(key)
        if entry is None or not entry.has_data or entry.stale:
            return True
        return self._clock() - entry.updated_at >= stale_time

    def get_data(self, key: QueryKey, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None or not entry.has_data:
            return default
        return entry.data

    def set_data(self, key: QueryKey, value: Any) -> Any:
        """Store ``value``, or ``value(current)`` when ``value`` is callable.

        The updater receives ``None`` when the key holds no data yet.
        """
        entry = self._entries.setdefault(key, _Entry())
        if callable(value):
            value = value(entry.data if entry.has_data else None)
        entry.data = value
        entry.updated_at = self._clock()
        entry.stale = False
        return value

    def remove(self, prefix: QueryKey) -> None:
        for key in self.keys(prefix):
            entry = self._entries.pop(key)
            if entry.task is not None and not entry.task.done():
                entry.task.cancel()

    def snapshot(self, keys: Iterable[QueryKey]) -> CacheSnapshot:
        return CacheSnapshot({key: self.get_data(key, _MISSING) for key in keys})

    def restore(self, snapshot: CacheSnapshot) -> None:
        """Put every snapshotted key back exactly as it was, including "no data"."""
        for key, data in snapshot.entries.items():
            if data is _MISSING:
                entry = self._entries.get(key)
                if entry is not None:
                    entry.data = _MISSING
                    entry.stale = True
                continue
            self.set_data(key, lambda _old, data=data: data)

    def invalidate(self, prefix: QueryKey) -> int:
        """Mark matching entries stale so the next ``fetch`` goes to the backend."""
        count = 0
        for key in self.keys(prefix):
            self._entries[key].stale = True
            count += 1
        return count

    async def cancel(self, prefix: QueryKey, *, exclude: QueryKey | None = None) -> int:
        tasks = []
        for key in self.keys(prefix):
            if key == exclude:
                continue
            task = self._entries[key].task
            if task is not None and not task.done():
                task.cancel()
                tasks.append(task)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.debug("queries_cancelled", prefix=prefix, count=len(tasks))
        return len(tasks)

    async def fetch(self, key: QueryKey, fetcher: Fetcher, *, stale_time: float = 0.0) -> Any:
        """Return fresh cached data, join an in-flight fetch, or run ``fetcher``.

        With the default ``stale_time`` of 0 cached data is always considered
        stale, so a fetch goes to the backend unless one is already running.
        """
        entry = self._entries.setdefault(key, _Entry())
        if entry.has_data and not self.is_stale(key, stale_time):
            return entry.data
        if entry.task is None or entry.task.done():
            entry.task = asyncio.ensure_future(fetcher())
        task = entry.task
        try:
            data = await asyncio.shield(task)
        finally:
            if entry.task is task and task.done():
                entry.task = None
        if self._entries.get(key) is entry:
            entry.data = data
            entry.updated_at = self._clock()
            entry.stale = False
        return data

    async def fetch_latest(
        self, prefix: QueryKey, key: QueryKey, fetcher: Fetcher, *, stale_time: float = 0.0
    ) -> Any:
        """Like ``fetch`` but first cancels other in-flight fetches under ``prefix``.

        Used for list queries whose key changes with the filters: an older
        request for a previous filter set is superseded by the new one.
        """
        await self.cancel(prefix, exclude=key)
        return await self.fetch(key, fetcher, stale_time=stale_time)


CURRENT_USER_KEY: QueryKey = ("currentUser",)


class EventKeys:
    all: QueryKey = ("events",)

    @classmethod
    def lists(cls) -> QueryKey:
        return (*cls.all, "list")

    @classmethod
    def lists_related(cls) -> QueryKey:
        return (*cls.lists(), "related")

    @classmethod
    def list(cls, **filters: Any) -> QueryKey:
        return (*cls.lists(), freeze(filters))

    @classmethod
    def search(cls, **filters: Any) -> QueryKey:
        return (*cls.lists_related(), freeze(filters))

    @classmethod
    def details(cls) -> QueryKey:
        return (*cls.all, "detail")

    @classmethod
    def detail(cls, event_id: str) -> QueryKey:
        return (*cls.details(), event_id)

    @classmethod
    def approvals(cls, event_id: str) -> QueryKey:
        return (*cls.detail(event_id), "approvals")

    @classmethod
    def pending(cls) -> QueryKey:
        return (*cls.all, "pending")

    @classmethod
    def pending_venue_owner(cls) -> QueryKey:
        return (*cls.pending(), "venueOwner")

    @classmethod
    def pending_dept_head(cls) -> QueryKey:
        return (*cls.pending(), "deptHead")

    @classmethod
    def own(cls) -> QueryKey:
        return (*cls.all, "own")

    @classmethod
    def approved(cls) -> QueryKey:
        return (*cls.all, "approved")

    @classmethod
    def timeline(cls, **filters: Any) -> QueryKey:
        return (*cls.all, "timelineByDate", freeze(filters))


class EquipmentReservationKeys:
    all: QueryKey = ("equipmentReservations",)

    @classmethod
    def lists(cls) -> QueryKey:
        return (*cls.all, "list")

    @classmethod
    def details(cls) -> QueryKey:
        return (*cls.all, "detail")

    @classmethod
    def detail(cls, reservation_id: str) -> QueryKey:
        return (*cls.details(), reservation_id)

    @classmethod
    def approvals(cls, reservation_id: str) -> QueryKey:
        return (*cls.detail(reservation_id), "approvals")

    @classmethod
    def pending(cls) -> QueryKey:
        return (*cls.all, "pending")

    @classmethod
    def pending_equipment_owner(cls) -> QueryKey:
        return (*cls.pending(), "equipmentOwner")

    @classmethod
    def all_equipment_owner(cls) -> QueryKey:
        return (*cls.all, "equipmentOwner")

    @classmethod
    def own(cls) -> QueryKey:
        return (*cls.all, "own")

    @classmethod
    def by_event(cls, event_id: str) -> QueryKey:
        return (*cls.all, "event", event_id)

