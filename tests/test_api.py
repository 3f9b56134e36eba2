import pytest
from src.api.main import app, service
from src.api.service import GraphService
from src.api.schemas import HistorySnapshot
from httpx import ASGITransport, AsyncClient

import pytest_asyncio

BASE = 1_700_000_000

# Fixture for async client
@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

@pytest.fixture
def snapshot():
    # Diamond: C0 merges C2 into C1, both fork from C3
    service.clear()
    return {
        "commits": [
            {"hash": "C0", "author": "A", "message": "Merge branch 'feature'", "date": BASE, "parents": ["C1", "C2"]},
            {"hash": "C1", "author": "A", "message": "fix: main work", "date": BASE - 600, "parents": ["C3"]},
            {"hash": "C2", "author": "B", "message": "feat: feature work", "date": BASE - 1200, "parents": ["C3"]},
            {"hash": "C3", "author": "A", "message": "chore: init", "date": BASE - 1800, "parents": []},
        ],
        "branches": [
            {"name": "main", "is_current": True, "target_hash": "C0"},
            {"name": "feature", "target_hash": "C2"},
        ],
    }

@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"

@pytest.mark.asyncio
async def test_graph(client, snapshot):
    response = await client.post("/api/graph", json=snapshot)
    assert response.status_code == 200
    data = response.json()

    assert data["lane_by_row"] == [0, 0, 1, 0]
    assert data["lane_count"] == 2
    assert data["mainline"] == ["C0", "C1", "C3"]
    assert [(e["from_row"], e["to_row"]) for e in data["edges"]] == [(0, 1), (0, 2), (1, 3), (2, 3)]
    assert data["edges"][0]["path"] == "M 15 27 L 15 65"
    assert data["edges"][1]["path"].startswith("M 15 27 C")

@pytest.mark.asyncio
async def test_labels(client, snapshot):
    response = await client.post("/api/labels", json=snapshot)
    assert response.status_code == 200
    assert response.json() == {"C0": "main", "C1": "main", "C2": "feature", "C3": "main"}

@pytest.mark.asyncio
async def test_flow(client, snapshot):
    response = await client.post("/api/flow", json=snapshot)
    assert response.status_code == 200
    groups = response.json()

    assert [g["id"] for g in groups] == ["C0", "C1", "C2", "C3"]
    assert groups[0]["type_label"] == "merge"
    assert groups[0]["relations"] == [{"kind": "merge", "label": "Merge", "count": 1}]
    assert groups[2]["branch_label"] == "feature"
    assert groups[2]["lane"] == 1
    assert groups[2]["authors"] == ["B"]

@pytest.mark.asyncio
async def test_history(client, snapshot):
    response = await client.post("/api/history", json=snapshot)
    assert response.status_code == 200
    data = response.json()

    assert data["lane_by_hash"] == {"C0": 0, "C1": 0, "C2": 1, "C3": 0}
    assert data["labels"]["C2"] == "feature"
    assert sum(len(g["commits"]) for g in data["groups"]) == 4

@pytest.mark.asyncio
async def test_empty_history(client):
    response = await client.post("/api/graph", json={"commits": []})
    assert response.status_code == 200
    data = response.json()
    assert data["lane_by_row"] == []
    assert data["height"] == 0

@pytest.mark.asyncio
async def test_invalid_snapshot(client):
    response = await client.post("/api/graph", json={"commits": [{"hash": "", "date": BASE}]})
    assert response.status_code == 422

    response = await client.post("/api/graph", json={"commits": [{"author": "A", "date": BASE}]})
    assert response.status_code == 422

def test_service_reuses_identical_snapshots(snapshot):
    first = service.render(HistorySnapshot(**snapshot))
    second = service.render(HistorySnapshot(**snapshot))
    assert first is second

    snapshot["branch_filters"] = ["feature"]
    third = service.render(HistorySnapshot(**snapshot))
    assert third is not first

    service.clear()
    assert service.render(HistorySnapshot(**snapshot)) is not third

def single_commit_snapshot(hash):
    return HistorySnapshot(commits=[{"hash": hash, "author": "A", "message": "feat: x", "date": BASE}])

def test_interleaved_renders_keep_their_own_views():
    # A second render runs to completion right after the first one starts
    # storing its result; the cache must never pair one snapshot with the
    # other snapshot's view.
    class InterleavingService(GraphService):
        pending = None

        def __setattr__(self, name, value):
            super().__setattr__(name, value)
            if name.startswith("_cache") and self.pending is not None:
                snapshot, self.pending = self.pending, None
                self.render(snapshot)

    svc = InterleavingService()
    svc.pending = single_commit_snapshot("B")

    assert svc.render(single_commit_snapshot("A")).layout.mainline == {"A"}
    assert svc.render(single_commit_snapshot("B")).layout.mainline == {"B"}
    assert svc.render(single_commit_snapshot("A")).layout.mainline == {"A"}

def test_responses_do_not_alias_the_cache(snapshot):
    snap = HistorySnapshot(**snapshot)
    groups = service.get_flow(snap)
    groups[0].commits.clear()
    groups[0].relations[0].count = 99

    again = service.get_flow(snap)
    assert len(again[0].commits) == 1
    assert again[0].relations[0].count == 1
    assert len(service.render(snap).groups[0].commits) == 1
