"""Immutable queued work item."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from classifier import ItemClass, compute_rank, get_item_class
from config import RANK_TRACE
from timeutil import ensure_utc, seconds_between, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class WorkItem:
    """
    A queued unit of work. Identity is the id alone; class and submission time
    are fixed at construction and the rank is always computed, never stored.
    """

    id: int
    submitted_at: datetime
    item_class: ItemClass = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "submitted_at", ensure_utc(self.submitted_at))
        object.__setattr__(self, "item_class", get_item_class(self.id))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorkItem):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def wait_time(self, ref: Optional[datetime] = None) -> float:
        """Seconds waited until ref (default: now). Never negative."""
        ref = utc_now() if ref is None else ensure_utc(ref)
        return max(0.0, seconds_between(self.submitted_at, ref))

    def rank(self, now: Optional[datetime] = None) -> float:
        """Current priority rank as of now (default: the wall clock)."""
        now = utc_now() if now is None else now
        rank = compute_rank(self.item_class, seconds_between(self.submitted_at, now))
        if RANK_TRACE:
            logger.debug("id: %d, class: %s, rank: %f", self.id, self.item_class.value, rank)
        return rank
