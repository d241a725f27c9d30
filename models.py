"""Pydantic models for queue API responses."""

from typing import List

from pydantic import BaseModel, Field

from classifier import ItemClass


class DequeuedItem(BaseModel):
    """Item returned by GET /dequeue."""

    id: int
    item_class: ItemClass
    submitted_at: str = Field(description="ISO-8601 UTC timestamp")


class PositionResponse(BaseModel):
    """Queue position; -1 when the id is not queued."""

    id: int
    position: int


class RemoveResponse(BaseModel):
    id: int
    removed: bool


class ItemIdsResponse(BaseModel):
    """Queued ids in dequeue order (override tier first)."""

    ids: List[int]


class MeanWaitTimeResponse(BaseModel):
    """Mean wait in whole seconds (truncated)."""

    seconds: int


class HealthResponse(BaseModel):
    status: str = "ok"
    queued: int
