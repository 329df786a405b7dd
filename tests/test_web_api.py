"""Tests for the web service."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from goraph.web import create_app

FIXTURES = Path(__file__).parent / "fixtures"
SAMPLE = FIXTURES / "sample_project"


@pytest.fixture
def client():
    return TestClient(create_app(SAMPLE))


@pytest.fixture
def missing_client():
    return TestClient(create_app(FIXTURES / "does-not-exist"))


def test_index(client):
    res = client.get("/")
    assert res.status_code == 200
    assert "text/html" in res.headers["content-type"]
    assert res.headers["cache-control"] == "no-cache"
    assert "/ws" in res.text


def test_graph_endpoint(client):
    res = client.get("/api/graph")
    assert res.status_code == 200
    data = res.json()
    ids = {n["id"] for n in data["graph"]["nodes"]}
    assert "example.com/app" in ids
    assert "z.io/orphan" not in ids
    assert data["summary"]["main"] == 1
    assert data["summary"]["edges"] == len(data["graph"]["edges"])


def test_graph_endpoint_missing_root(missing_client):
    res = missing_client.get("/api/graph")
    assert res.status_code == 404


def test_websocket_sends_graph(client):
    with client.websocket_connect("/ws") as ws:
        msg = ws.receive_json()
    assert "graph" in msg
    node = next(n for n in msg["graph"]["nodes"] if n["id"] == "pkg:root")
    assert node["type"] == "package"
    assert node["label"] == "main"
    assert (node["x"], node["y"], node["vx"], node["vy"]) == (0, 0, 0, 0)
    assert {"source": "example.com/app", "target": "golang.org/x/mod"} in msg["graph"]["edges"]


def test_websocket_fresh_graph_per_connection(client):
    with client.websocket_connect("/ws") as ws:
        first = ws.receive_json()
    with client.websocket_connect("/ws") as ws:
        second = ws.receive_json()
    assert first == second


def test_websocket_missing_root(missing_client):
    with missing_client.websocket_connect("/ws") as ws:
        msg = ws.receive_json()
    assert "error" in msg
    assert "does not exist" in msg["error"]


def test_websocket_accepts_binary_frames(client):
    with client.websocket_connect("/ws") as ws:
        assert "graph" in ws.receive_json()
        ws.send_bytes(b"ping")
        ws.send_text("ping")
