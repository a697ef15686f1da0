"""API tests."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from binge_tracker.core.config import Settings
from binge_tracker.main import app, create_app

from conftest import FakeCatalog, weekly_season_details


@pytest.fixture
def catalog(monkeypatch) -> FakeCatalog:
    """Swap the TMDB client for an in-memory catalog."""
    fake = FakeCatalog()
    monkeypatch.setattr(app.state.show_tracker, "catalog", fake)
    return fake


@pytest.fixture
def client(catalog):
    """Create a test client with the app lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


def add_show(catalog: FakeCatalog, tmdb_id: int) -> None:
    catalog.add_show(
        tmdb_id,
        f"Show {tmdb_id}",
        [weekly_season_details(tmdb_id, 1, date(2024, 1, 1), episode_count=10, dated_episodes=4)],
    )


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Binge Tracker"
    assert "version" in data


def test_health(client):
    """Test health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["catalog"] == "enabled"


def test_resolve_weekly(client):
    """Test resolving an ad-hoc weekly season."""
    response = client.post(
        "/api/resolve",
        json={
            "season_air_date": "2024-01-01",
            "episode_count": 10,
            "episodes": [
                {"episode_number": 1, "air_date": "2024-01-01"},
                {"episode_number": 2, "air_date": "2024-01-08"},
                {"episode_number": 3, "air_date": "2024-01-15"},
            ],
            "as_of": "2024-02-19",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["date_info"]["release_pattern"] == "weekly"
    assert data["date_info"]["finale_date"] == "2024-03-04"
    assert data["date_info"]["is_finale_estimated"] is True
    assert data["state"] == "airing"
    assert data["countdown"]["days_until_finale"] == 14
    assert data["countdown"]["episodes_remaining"] == 7


def test_resolve_all_at_once(client):
    """Test an all-at-once drop is binge-ready on premiere day."""
    response = client.post(
        "/api/resolve",
        json={
            "episode_count": 3,
            "episodes": [{"episode_number": n, "air_date": "2024-06-14"} for n in (1, 2, 3)],
            "as_of": "2024-06-14",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["date_info"]["release_pattern"] == "all_at_once"
    assert data["state"] == "binge_ready"
    assert data["countdown"]["is_finale_day"] is True


def test_resolve_rejects_invalid_episode_number(client):
    response = client.post(
        "/api/resolve",
        json={"episode_count": 1, "episodes": [{"episode_number": 0}]},
    )
    assert response.status_code == 422


def test_follow_and_get_show(client, catalog):
    """Test following a show and reading it back."""
    add_show(catalog, 3001)

    response = client.post("/api/shows/follow/3001", params={"as_of": "2024-01-20"})
    assert response.status_code == 200
    show = response.json()
    assert show["title"] == "Show 3001"
    assert show["seasons"][0]["state"] == "airing"

    response = client.get(f"/api/shows/{show['id']}")
    assert response.status_code == 200
    assert response.json()["tmdb_id"] == 3001

    listed = client.get("/api/shows").json()
    assert any(s["tmdb_id"] == 3001 for s in listed)


def test_follow_unknown_show(client):
    response = client.post("/api/shows/follow/424242")
    assert response.status_code == 404


def test_follow_without_catalog(client, monkeypatch):
    monkeypatch.setattr(app.state.show_tracker, "catalog", None)

    response = client.post("/api/shows/follow/3002")
    assert response.status_code == 503


def test_get_missing_show(client):
    assert client.get("/api/shows/999999").status_code == 404
    assert client.delete("/api/shows/999999").status_code == 404
    assert client.post("/api/shows/999999/refresh").status_code == 404


def test_season_countdown_and_watched(client, catalog):
    """Test countdown, marking watched and clearing it."""
    add_show(catalog, 3003)
    show = client.post("/api/shows/follow/3003", params={"as_of": "2024-01-20"}).json()
    season_id = show["seasons"][0]["id"]

    response = client.get(f"/api/seasons/{season_id}/countdown", params={"as_of": "2024-02-19"})
    assert response.status_code == 200
    countdown = response.json()
    assert countdown["state"] == "airing"
    assert countdown["days_until_finale"] == 14
    # All four dated episodes have aired by the query date
    assert countdown["episodes_remaining"] == 6

    response = client.post(
        f"/api/seasons/{season_id}/watched", json={"watched_date": "2024-03-10"}
    )
    assert response.status_code == 200
    assert response.json()["state"] == "watched"

    response = client.delete(f"/api/seasons/{season_id}/watched", params={"as_of": "2024-03-10"})
    assert response.status_code == 200
    data = response.json()
    assert data["watched_date"] is None
    assert data["state"] == "binge_ready"


def test_list_seasons_by_state(client, catalog):
    add_show(catalog, 3004)
    show = client.post("/api/shows/follow/3004", params={"as_of": "2024-01-20"}).json()

    response = client.get("/api/seasons", params={"state": "premiering", "as_of": "2023-12-01"})
    assert response.status_code == 200
    assert any(s["show_id"] == show["id"] for s in response.json())

    response = client.get("/api/seasons", params={"state": "watched", "as_of": "2023-12-01"})
    assert all(s["show_id"] != show["id"] for s in response.json())


def test_missing_season(client):
    assert client.get("/api/seasons/999999/countdown").status_code == 404
    assert client.post("/api/seasons/999999/watched").status_code == 404


def test_unfollow_show(client, catalog):
    add_show(catalog, 3005)
    show = client.post("/api/shows/follow/3005").json()

    response = client.delete(f"/api/shows/{show['id']}")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert client.get(f"/api/shows/{show['id']}").status_code == 404


def test_refresh_all(client, catalog):
    add_show(catalog, 3006)
    client.post("/api/shows/follow/3006")

    response = client.post("/api/shows/refresh")
    assert response.status_code == 200
    assert response.json()["refreshed"] >= 1


def test_refollow_show_removed_from_tmdb(client, catalog):
    """Re-following a show TMDB no longer has is a 404, not a gateway error."""
    add_show(catalog, 3007)
    show = client.post("/api/shows/follow/3007").json()
    del catalog.shows[3007]

    assert client.post("/api/shows/follow/3007").status_code == 404
    assert client.post(f"/api/shows/{show['id']}/refresh").status_code == 404


def test_api_key_comes_from_app_settings():
    """Mutating endpoints use the API key of the settings the app was built with."""
    secured = create_app(Settings(api_key="secret", _env_file=None))

    with TestClient(secured) as secured_client:
        assert secured_client.post("/api/shows/refresh").status_code == 401
        response = secured_client.post(
            "/api/shows/refresh", headers={"Authorization": "Bearer secret"}
        )
        # No catalog configured in these settings
        assert response.status_code == 503
