import pytest
from fastapi.testclient import TestClient

from app import app
from queue_store import work_queue


@pytest.fixture
def client():
    work_queue.clear()
    yield TestClient(app)
    work_queue.clear()


def _enqueue(client, item_id, time):
    return client.put(f"/enqueue/{item_id}/time/{time}")


def test_enqueue_and_list(client):
    assert _enqueue(client, 5, "2017-07-28T12:00:00").status_code == 204
    assert _enqueue(client, 3, "2017-07-28T12:00:00Z").status_code == 204
    assert _enqueue(client, 2, "2017-07-28T12:00:01").status_code == 204
    assert _enqueue(client, 15, "2017-07-28T12:00:01Z").status_code == 204

    items = client.get("/items")
    assert items.status_code == 200
    assert items.json() == {"ids": [15, 5, 3, 2]}

    pos = client.get("/pos/3")
    assert pos.json() == {"id": 3, "position": 2}
    assert client.get("/pos/25").json()["position"] == -1


def test_position_of_non_positive_id_is_not_found(client):
    _enqueue(client, 2, "2017-07-28T12:00:00")
    assert client.get("/pos/0").json()["position"] == -1
    assert client.get("/pos/-2").json()["position"] == -1


def test_enqueue_rejects_bad_input(client):
    assert _enqueue(client, 0, "2017-07-28T12:00:00").status_code == 400
    assert _enqueue(client, -4, "2017-07-28T12:00:00").status_code == 400
    assert _enqueue(client, 4, "not-a-time").status_code == 400
    assert _enqueue(client, 4, "2999-01-01T00:00:00").status_code == 400
    assert _enqueue(client, 7, "9999-12-31T23:59:59-01:00").status_code == 400
    assert _enqueue(client, 2**80, "2017-07-28T12:00:00").status_code == 400
    assert client.get("/items").json() == {"ids": []}


def test_enqueue_duplicate_conflicts(client):
    assert _enqueue(client, 7, "2017-07-28T12:00:00").status_code == 204
    assert _enqueue(client, 7, "2017-07-28T12:00:05").status_code == 409


def test_dequeue(client):
    _enqueue(client, 2, "2017-07-28T12:00:00")
    _enqueue(client, 15, "2017-07-28T12:00:00")
    first = client.get("/dequeue")
    assert first.status_code == 200
    body = first.json()
    assert body["id"] == 15
    assert body["item_class"] == "MANAGEMENT_OVERRIDE"
    assert body["submitted_at"].startswith("2017-07-28T12:00:00")
    assert client.get("/dequeue").json()["id"] == 2
    assert client.get("/dequeue").status_code == 404


def test_remove(client):
    _enqueue(client, 2, "2017-07-28T12:00:00")
    assert client.delete("/items/2").json() == {"id": 2, "removed": True}
    assert client.delete("/items/2").json() == {"id": 2, "removed": False}


def test_mean_wait_time(client):
    _enqueue(client, 2, "2017-07-28T12:00:00")
    _enqueue(client, 3, "2017-07-28T12:00:05")
    _enqueue(client, 5, "2017-07-28T12:00:10")
    _enqueue(client, 15, "2017-07-28T12:00:15")
    resp = client.get("/meanwaittime/2017-07-28T12:00:20Z")
    assert resp.status_code == 200
    assert resp.json() == {"seconds": 12}


def test_mean_wait_time_errors(client):
    assert client.get("/meanwaittime/2017-07-28T12:00:20Z").status_code == 404
    _enqueue(client, 2, "2017-07-28T12:00:00")
    assert client.get("/meanwaittime/garbage").status_code == 400


def test_health(client):
    _enqueue(client, 2, "2017-07-28T12:00:00")
    assert client.get("/health").json() == {"status": "ok", "queued": 1}
