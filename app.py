"""Ranked work queue REST API: enqueue, dequeue, position and wait-time queries."""

import logging

from fastapi import FastAPI, HTTPException, Response

from config import API_TITLE, API_VERSION, LOG_FORMAT, get_log_level
from errors import DuplicateItem, EmptyQueue, InvalidArgument
from models import (
    DequeuedItem,
    HealthResponse,
    ItemIdsResponse,
    MeanWaitTimeResponse,
    PositionResponse,
    RemoveResponse,
)
from queue_store import work_queue
from timeutil import parse_timestamp

logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(title=API_TITLE, version=API_VERSION)


@app.put("/enqueue/{item_id}/time/{time}", status_code=204)
def enqueue(item_id: int, time: str) -> Response:
    """Queue a work item. 400 on invalid id/time, 409 if already queued."""
    if item_id <= 0:
        raise HTTPException(status_code=400, detail="Invalid id")
    try:
        work_queue.enqueue(item_id, parse_timestamp(time))
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateItem as e:
        raise HTTPException(status_code=409, detail=str(e))
    return Response(status_code=204)


@app.get("/dequeue", response_model=DequeuedItem)
def dequeue() -> DequeuedItem:
    """Remove and return the top item. 404 if the queue is empty."""
    item = work_queue.dequeue()
    if item is None:
        raise HTTPException(status_code=404, detail="Queue is empty")
    return DequeuedItem(
        id=item.id,
        item_class=item.item_class,
        submitted_at=item.submitted_at.isoformat(),
    )


@app.get("/pos/{item_id}", response_model=PositionResponse)
def get_position(item_id: int) -> PositionResponse:
    """Zero-based queue position, -1 if not queued."""
    position = work_queue.get_position(item_id) if item_id > 0 else -1
    return PositionResponse(id=item_id, position=position)


@app.delete("/items/{item_id}", response_model=RemoveResponse)
def remove_item(item_id: int) -> RemoveResponse:
    return RemoveResponse(id=item_id, removed=work_queue.remove(item_id))


@app.get("/items", response_model=ItemIdsResponse)
def list_items() -> ItemIdsResponse:
    """All queued ids in priority order."""
    return ItemIdsResponse(ids=work_queue.get_ids())


@app.get("/meanwaittime/{since}", response_model=MeanWaitTimeResponse)
def mean_wait_time(since: str) -> MeanWaitTimeResponse:
    """Mean wait relative to `since`. 400 on bad time, 404 if the queue is empty."""
    try:
        reference_time = parse_timestamp(since)
        seconds = work_queue.average_wait_time(reference_time)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EmptyQueue as e:
        raise HTTPException(status_code=404, detail=str(e))
    return MeanWaitTimeResponse(seconds=int(seconds))


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Health check."""
    return HealthResponse(status="ok", queued=work_queue.size())
