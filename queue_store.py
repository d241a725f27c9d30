"""In-memory ranked work queue: an override tier ahead of a general tier, each ordered by live rank."""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Dict, Iterator, List, Optional

from classifier import is_override
from config import ITEM_ID_MAX, ITEM_ID_MIN
from errors import DuplicateItem, EmptyQueue, InvalidArgument
from timeutil import ensure_utc, utc_now
from work_item import WorkItem

logger = logging.getLogger(__name__)

RankKey = Callable[[WorkItem], float]


def rank_at(now: datetime) -> RankKey:
    """Ordering key for one snapshot: every item is ranked against the same instant."""
    return lambda item: item.rank(now)


class _RankedContainer:
    """
    One tier of the queue. Not thread-safe on its own: callers hold `lock`
    for the whole read-modify-write sequence.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.lock = threading.Lock()
        # Insertion order is the tie-break for equal ranks
        self._items: Dict[int, WorkItem] = {}

    def __len__(self) -> int:
        return len(self._items)

    def add(self, item: WorkItem) -> None:
        if item.id in self._items:
            raise DuplicateItem(item.id)
        self._items[item.id] = item

    def poll(self, key: RankKey) -> Optional[WorkItem]:
        """Remove and return the highest-rank item, or None if empty."""
        if not self._items:
            return None
        # Ranks of different classes cross over time, so the max is found at poll time
        top = max(self._items.values(), key=key)
        del self._items[top.id]
        return top

    def discard(self, item_id: int) -> bool:
        return self._items.pop(item_id, None) is not None

    def ordered(self, key: RankKey) -> List[WorkItem]:
        """Items by descending rank; stable, so ties keep insertion order."""
        return sorted(self._items.values(), key=key, reverse=True)

    def items(self) -> List[WorkItem]:
        return list(self._items.values())

    def clear(self) -> None:
        self._items.clear()


class RankedQueue:
    """
    Work-admission queue ordered by time-decaying rank.

    MANAGEMENT_OVERRIDE items live in the override tier and always precede the
    general tier (NORMAL, PRIORITY, VIP) regardless of rank. Each tier has its
    own lock. Operations spanning both tiers take the override lock first, then
    the general lock.

    Positions and id listings are snapshots: ranks keep moving with the clock,
    so a position read now may differ from what a later dequeue observes.
    """

    def __init__(self) -> None:
        self._override = _RankedContainer("override")
        self._general = _RankedContainer("general")

    def _container_for(self, item: WorkItem) -> _RankedContainer:
        return self._override if is_override(item.item_class) else self._general

    @contextmanager
    def _both_locked(self) -> Iterator[None]:
        with self._override.lock:
            with self._general.lock:
                yield

    def enqueue(self, item_id: int, submitted_at: datetime) -> WorkItem:
        """
        Queue a work item.
        Raises InvalidArgument if the id is outside the 64-bit range or submitted_at
        is later than now, DuplicateItem if the id is queued.
        """
        if not ITEM_ID_MIN <= item_id <= ITEM_ID_MAX:
            raise InvalidArgument(f"Item id {item_id} is outside the 64-bit range")
        submitted_at = ensure_utc(submitted_at)
        if submitted_at > utc_now():
            logger.warning("Rejected item %d: submission time %s is in the future", item_id, submitted_at.isoformat())
            raise InvalidArgument("Queueing date is later than current time")
        item = WorkItem(item_id, submitted_at)
        container = self._container_for(item)
        with container.lock:
            try:
                container.add(item)
            except DuplicateItem:
                logger.warning("Rejected item %d: already queued", item_id)
                raise
        logger.info("Queued item %d class=%s tier=%s", item_id, item.item_class.value, container.name)
        return item

    def dequeue(self) -> Optional[WorkItem]:
        """Remove and return the top item (override tier first), or None if the queue is empty."""
        for container in (self._override, self._general):
            with container.lock:
                item = container.poll(rank_at(utc_now()))
            if item is not None:
                logger.info("Dequeued item %d from %s tier", item.id, container.name)
                return item
        return None

    def get_position(self, item_id: int) -> int:
        """Zero-based position in the combined ordering, or -1 if not queued."""
        with self._both_locked():
            key = rank_at(utc_now())
            override = self._override.ordered(key)
            for index, item in enumerate(override):
                if item.id == item_id:
                    return index
            for index, item in enumerate(self._general.ordered(key)):
                if item.id == item_id:
                    return index + len(override)
        return -1

    def remove(self, item_id: int) -> bool:
        """Remove an item by id. Returns True if it was queued."""
        # Each tier is locked and released on its own; no lock spans the early return
        with self._override.lock:
            removed = self._override.discard(item_id)
        if not removed:
            with self._general.lock:
                removed = self._general.discard(item_id)
        logger.info("Remove item %d: %s", item_id, "removed" if removed else "not found")
        return removed

    def get_ids(self) -> List[int]:
        """All queued ids: override tier by descending rank, then general tier by descending rank."""
        with self._both_locked():
            key = rank_at(utc_now())
            ordered = self._override.ordered(key) + self._general.ordered(key)
        logger.debug("Snapshot of %d items", len(ordered))
        return [item.id for item in ordered]

    def average_wait_time(self, reference_time: datetime) -> float:
        """
        Mean wait in seconds of all queued items relative to reference_time.
        Raises EmptyQueue when nothing is queued.
        """
        reference_time = ensure_utc(reference_time)
        with self._both_locked():
            items = self._override.items() + self._general.items()
        if not items:
            raise EmptyQueue("Average wait time is undefined for an empty queue")
        total = sum(item.wait_time(reference_time) for item in items)
        return total / len(items)

    def size(self) -> int:
        with self._both_locked():
            return len(self._override) + len(self._general)

    def __len__(self) -> int:
        return self.size()

    def clear(self) -> None:
        """Drop every queued item."""
        with self._both_locked():
            self._override.clear()
            self._general.clear()
        logger.info("Queue cleared")


# Process-wide queue used by the HTTP layer
work_queue = RankedQueue()
