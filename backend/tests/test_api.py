"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from photoguesser.config import Settings, get_settings
from photoguesser.main import app


def _upload(client, jpeg_factory, *photos):
    files = [
        ("files", (name, jpeg_factory(*position), "image/jpeg"))
        for name, position in photos
    ]
    return client.post("/api/photos", files=files)


def test_health(client) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_config_reports_map_and_profiles(client) -> None:
    response = client.get("/api/config")

    assert response.status_code == 200
    data = response.json()
    assert data["map_enabled"] is True
    assert data["map_api_key"] == "test-key"
    assert data["default_order"] == "sequential"
    assert data["default_scale"] == "country"
    assert [s["value"] for s in data["scales"]] == ["city", "state", "country"]


def test_upload_summarizes_playable_photos(client, jpeg_factory) -> None:
    response = _upload(client, jpeg_factory, ("a.jpg", (1, 2)), ("b.jpg", ()))

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["playable"] == 1
    assert data["excluded"] == 1
    assert "excluded" in data["message"]

    image = client.get(data["photos"][0]["url"])
    assert image.status_code == 200
    assert image.headers["content-type"] == "image/jpeg"


def test_full_game_over_http(client, jpeg_factory) -> None:
    _upload(client, jpeg_factory, ("p1.jpg", (0, 0)), ("p2.jpg", (10, 10)))

    response = client.post("/api/game/start", json={"order": "sequential", "scale": "city"})
    assert response.status_code == 201
    data = response.json()
    assert data["stage"] == "guessing"
    assert data["round_number"] == 1
    assert data["total_rounds"] == 2
    assert data["progress"] == 50
    assert data["reveal"] is False
    assert data["current_round"]["photo_name"] == "p1.jpg"
    assert data["current_round"]["actual_latitude"] is None

    client.post("/api/game/guess", json={"latitude": 0, "longitude": 0})
    response = client.post("/api/game/confirm")
    assert response.status_code == 200
    first = response.json()
    assert first["score"] == 5000
    assert first["distance_label"] == "0 m"
    assert first["game_completed"] is False

    current = client.get("/api/game/current").json()
    assert current["stage"] == "resolved"
    assert current["reveal"] is True
    assert current["current_round"]["actual_latitude"] == 0

    response = client.post("/api/game/next")
    assert response.json()["stage"] == "guessing"
    assert response.json()["current_round"]["photo_name"] == "p2.jpg"

    client.post("/api/game/guess", json={"latitude": 10.1, "longitude": 10.1})
    second = client.post("/api/game/confirm").json()
    assert 0 < second["score"] < 5000
    assert second["distance_label"].endswith("km")
    assert second["game_completed"] is True

    response = client.post("/api/game/next")
    data = response.json()
    assert data["stage"] == "complete"
    assert data["total_score"] == 5000 + second["score"]

    rounds = client.get("/api/game/rounds").json()
    assert [r["score"] for r in rounds] == [5000, second["score"]]


def test_start_without_playable_photos_is_rejected(client, jpeg_factory) -> None:
    _upload(client, jpeg_factory, ("b.jpg", ()))

    response = client.post("/api/game/start", json={})

    assert response.status_code == 400
    assert "GPS" in response.json()["detail"]


def test_confirm_without_guess_changes_nothing(client, jpeg_factory) -> None:
    _upload(client, jpeg_factory, ("a.jpg", (1, 2)))
    client.post("/api/game/start", json={})

    response = client.post("/api/game/confirm")

    assert response.status_code == 400
    assert client.get("/api/game/current").json()["stage"] == "guessing"


def test_out_of_order_actions_conflict(client, jpeg_factory) -> None:
    assert client.post("/api/game/guess", json={"latitude": 0, "longitude": 0}).status_code == 409
    assert client.post("/api/game/next").status_code == 409

    _upload(client, jpeg_factory, ("a.jpg", (1, 2)))
    client.post("/api/game/start", json={})

    assert client.post("/api/game/next").status_code == 409


def test_guess_out_of_range_is_invalid(client, jpeg_factory) -> None:
    _upload(client, jpeg_factory, ("a.jpg", (1, 2)))
    client.post("/api/game/start", json={})

    response = client.post("/api/game/guess", json={"latitude": 91, "longitude": 0})

    assert response.status_code == 422


def test_replay_after_completion(client, jpeg_factory) -> None:
    _upload(client, jpeg_factory, ("a.jpg", (1, 2)))
    client.post("/api/game/start", json={})
    client.post("/api/game/guess", json={"latitude": 1, "longitude": 2})
    client.post("/api/game/confirm")
    client.post("/api/game/next")

    response = client.post("/api/game/replay")

    assert response.status_code == 201
    data = response.json()
    assert data["stage"] == "guessing"
    assert data["total_score"] == 0


def test_clearing_photos_returns_to_setup_and_releases_images(client, jpeg_factory) -> None:
    data = _upload(client, jpeg_factory, ("a.jpg", (1, 2))).json()
    client.post("/api/game/start", json={})

    assert client.delete("/api/photos").status_code == 204

    assert client.get("/api/game/current").json()["stage"] == "setup"
    assert client.get(data["photos"][0]["url"]).status_code == 404
    assert client.get("/api/game/rounds").status_code == 404
    assert client.get("/api/photos").json()["total"] == 0


def test_guessing_requires_map_key(store, jpeg_factory) -> None:
    from photoguesser.dependencies import get_store

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, GOOGLE_MAPS_API_KEY=None)
    try:
        with TestClient(app) as client:
            _upload(client, jpeg_factory, ("a.jpg", (1, 2)))
            client.post("/api/game/start", json={})

            assert client.get("/api/config").json()["map_enabled"] is False
            response = client.post("/api/game/guess", json={"latitude": 1, "longitude": 2})
            assert response.status_code == 503
            assert client.get("/api/game/current").json()["stage"] == "guessing"
    finally:
        app.dependency_overrides.clear()


def test_too_many_files_rejected(store, settings, jpeg_factory) -> None:
    from photoguesser.dependencies import get_store

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings.model_copy(update={"MAX_UPLOAD_FILES": 1})
    try:
        with TestClient(app) as client:
            response = _upload(client, jpeg_factory, ("a.jpg", (1, 2)), ("b.jpg", (3, 4)))
            assert response.status_code == 413
    finally:
        app.dependency_overrides.clear()
