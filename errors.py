"""Faults raised by the ranked queue core.

Absent results (empty dequeue, position -1, failed remove) are return values,
not exceptions.
"""


class QueueError(Exception):
    """Base class for every fault raised by the queue core."""


class InvalidArgument(QueueError, ValueError):
    """Malformed or out-of-range input, e.g. a submission time in the future."""


class DuplicateItem(QueueError):
    """The id is already queued."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Item {item_id} already exists in the queue")
        self.item_id = item_id


class EmptyQueue(QueueError):
    """An aggregate was requested over a queue holding no items."""
