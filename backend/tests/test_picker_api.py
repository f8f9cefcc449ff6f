"""
Endpoint tests for the picker API
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app


@pytest.fixture
def client():
    app = create_app(max_id=10, rate_limit=False)
    with TestClient(app) as test_client:
        yield test_client


def test_state_starts_empty(client):
    response = client.get("/api/state")
    assert response.status_code == 200
    assert response.json() == {"selectedOrder": [], "extraIds": [], "maxId": 10}


def test_bulk_add_scenario(client):
    response = client.post("/api/items/bulk", json={"ids": [15, 15, 3, "x"]})
    assert response.status_code == 200
    assert response.json() == {"added": [15], "skipped": [15, 3, "x"]}

    state = client.get("/api/state").json()
    assert state["extraIds"] == [15]


@pytest.mark.parametrize("body", [{}, {"ids": "nope"}, {"ids": None}, [1, 2], "text"])
def test_bulk_add_tolerates_malformed_bodies(client, body):
    response = client.post("/api/items/bulk", json=body)
    assert response.status_code == 200
    assert response.json() == {"added": [], "skipped": []}


def test_bulk_add_without_body(client):
    response = client.post("/api/items/bulk")
    assert response.status_code == 200
    assert response.json() == {"added": [], "skipped": []}


def test_put_selected_replaces_order(client):
    response = client.put("/api/selected", json={"order": [5, 5, 3, 7]})
    assert response.status_code == 200
    assert response.json() == {"selectedOrder": [5, 3, 7]}

    response = client.put("/api/selected", json={"order": [12, "1"]})
    assert response.json() == {"selectedOrder": [12, 1]}
    assert client.get("/api/state").json()["extraIds"] == [12]


@pytest.mark.parametrize("body", [{}, {"order": 5}, {"order": {"a": 1}}])
def test_put_selected_tolerates_malformed_bodies(client, body):
    client.put("/api/selected", json={"order": [1]})
    response = client.put("/api/selected", json=body)
    assert response.status_code == 200
    assert response.json() == {"selectedOrder": []}


def test_unselected_defaults(client):
    response = client.get("/api/unselected")
    assert response.status_code == 200
    assert response.json() == {"items": list(range(1, 11)), "total": 10}


def test_unselected_paging_and_filter(client):
    client.put("/api/selected", json={"order": [2, 4]})

    response = client.get("/api/unselected", params={"offset": 0, "limit": 3})
    assert response.json() == {"items": [1, 3, 5], "total": 8}

    response = client.get("/api/unselected", params={"offset": 3, "limit": 3})
    assert response.json() == {"items": [6, 7, 8], "total": 8}

    response = client.get("/api/unselected", params={"filter": "1", "limit": 10})
    assert response.json() == {"items": [1, 10], "total": 2}


def test_unselected_non_numeric_params_fall_back_to_defaults(client):
    response = client.get("/api/unselected", params={"offset": "abc", "limit": "zz"})
    assert response.json() == {"items": list(range(1, 11)), "total": 10}

    response = client.get("/api/unselected", params={"offset": "2x", "limit": "2y"})
    assert response.json() == {"items": [3, 4], "total": 10}


def test_unselected_zero_limit_still_reports_total(client):
    response = client.get("/api/unselected", params={"limit": 0})
    assert response.json() == {"items": [], "total": 10}


def test_unselected_includes_extras_after_dense_range(client):
    client.post("/api/items/bulk", json={"ids": [30, 20]})
    response = client.get("/api/unselected", params={"offset": 9, "limit": 5})
    assert response.json() == {"items": [10, 20, 30], "total": 12}


def test_rate_limited_app_still_serves_requests():
    app = create_app(max_id=3, rate_limit=True)
    with TestClient(app) as test_client:
        response = test_client.get("/api/unselected")
    assert response.status_code == 200
    assert response.json() == {"items": [1, 2, 3], "total": 3}
