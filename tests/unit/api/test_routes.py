"""
Unit tests for src/api/routes/
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.jobs.harvester import HarvestState


class FakeHarvester:
    """Harvester stand-in with a switchable trigger result."""

    def __init__(self, accept_trigger: bool = True):
        self.accept_trigger = accept_trigger
        self.triggered = 0
        self.is_running = False
        self.state = HarvestState()

    def trigger(self) -> bool:
        self.triggered += 1
        if self.accept_trigger:
            self.is_running = True
        return self.accept_trigger

    def snapshot(self) -> dict:
        return {
            "listings": [],
            "lastScrapeTime": None,
            "scraping": self.is_running,
            "scrapeCount": 0,
            "scrapeProgress": {"current": 0, "total": 8, "currentName": ""},
            "newIds": [],
            "stats": {"total": 0},
        }


@pytest.fixture
def fake_harvester(monkeypatch):
    """Install a FakeHarvester as the singleton."""
    harvester = FakeHarvester()
    monkeypatch.setattr("src.jobs.harvester._harvester", harvester)
    return harvester


@pytest.fixture
def client():
    """Test client without lifespan, so the scheduler does not start."""
    return TestClient(app)


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client, fake_harvester):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": True, "scraping": False, "scrapeCount": 0}


class TestListings:
    """Tests for GET /api/listings."""

    def test_snapshot_shape(self, client, fake_harvester):
        response = client.get("/api/listings")

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {
            "listings",
            "lastScrapeTime",
            "scraping",
            "scrapeCount",
            "scrapeProgress",
            "newIds",
            "stats",
        }
        assert body["scrapeProgress"]["total"] == 8


class TestScrape:
    """Tests for GET /api/scrape."""

    def test_started(self, client, fake_harvester):
        response = client.get("/api/scrape")

        assert response.json() == {"status": "started"}
        assert fake_harvester.triggered == 1

    def test_already_scraping(self, client, fake_harvester):
        fake_harvester.accept_trigger = False

        response = client.get("/api/scrape")

        assert response.json() == {"status": "already_scraping"}


class TestErrors:
    """Tests for the unified error format."""

    def test_unknown_route(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Not Found"}
