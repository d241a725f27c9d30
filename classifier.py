"""Work item classification and the time-decay rank formula."""

import enum
import math
from typing import List, Tuple

from config import PRIORITY_RANK_FLOOR, VIP_RANK_FACTOR, VIP_RANK_FLOOR


class ItemClass(str, enum.Enum):
    NORMAL = "NORMAL"
    PRIORITY = "PRIORITY"
    VIP = "VIP"
    MANAGEMENT_OVERRIDE = "MANAGEMENT_OVERRIDE"


# Divisor rules (order matters: first match wins)
CLASS_RULES: List[Tuple[ItemClass, Tuple[int, ...]]] = [
    (ItemClass.MANAGEMENT_OVERRIDE, (3, 5)),
    (ItemClass.PRIORITY, (3,)),
    (ItemClass.VIP, (5,)),
]


def get_item_class(item_id: int) -> ItemClass:
    """Classify an id by divisibility. Pure function of the id."""
    for item_class, divisors in CLASS_RULES:
        if all(item_id % d == 0 for d in divisors):
            return item_class
    return ItemClass.NORMAL


def is_override(item_class: ItemClass) -> bool:
    return item_class is ItemClass.MANAGEMENT_OVERRIDE


def _t_log_t(seconds: float) -> float:
    # t*ln(t) is <= 0 for t <= 1 and undefined at 0; callers apply a positive floor
    if seconds <= 1.0:
        return 0.0
    return seconds * math.log(seconds)


def compute_rank(item_class: ItemClass, seconds_elapsed: float) -> float:
    """
    Priority rank for an item that has waited seconds_elapsed.
    Higher rank = dequeued sooner.
    """
    if item_class is ItemClass.PRIORITY:
        return max(PRIORITY_RANK_FLOOR, _t_log_t(seconds_elapsed))
    if item_class is ItemClass.VIP:
        return max(VIP_RANK_FLOOR, VIP_RANK_FACTOR * _t_log_t(seconds_elapsed))
    # NORMAL and MANAGEMENT_OVERRIDE rank by plain elapsed time
    return seconds_elapsed
