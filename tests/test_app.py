"""Application wiring: headers, health check, error handlers, CLI, docs."""

import logging

from pymongo.errors import PyMongoError

from app import create_app
from common.utils.logging_service import configure_logging, logger


def test_no_cache_headers(client):
    response = client.get("/api/reviews")

    assert response.headers["Cache-Control"] == "no-store, max-age=0, must-revalidate"
    assert response.headers["Pragma"] == "no-cache"
    assert response.headers["Expires"] == "0"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_health_check(client, collection):
    assert client.get("/api/health").get_json() == {"database": "up"}

    collection.error = PyMongoError("down")
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"database": "down"}


def test_unknown_route_is_json(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}


def test_wrong_method_is_json(client):
    response = client.patch("/api/reviews")

    assert response.status_code == 405
    assert response.get_json() == {"error": "Method not allowed"}


def test_ensure_indexes_command(app, collection):
    result = app.test_cli_runner().invoke(args=["ensure-indexes"])

    assert result.exit_code == 0
    assert "movieId_1" in result.output
    assert collection.indexes == ["movieId_1", "userId_1", "createdAt_1"]


def test_swagger_lists_routes(client):
    spec = client.get("/swagger/").get_json()

    assert "/api/reviews" in spec["paths"]
    assert "/api/movies/popular" in spec["paths"]


def test_default_config_serves_json_over_http(collection, tmdb_client, monkeypatch):
    monkeypatch.delenv("FORCE_HTTPS", raising=False)
    app = create_app(reviews_collection=collection, tmdb_client=tmdb_client)

    response = app.test_client().get("/api/reviews")

    assert response.status_code == 200
    assert response.content_type == "application/json"
    assert response.get_json() == []


def test_force_https_redirects_plain_http(collection, tmdb_client):
    app = create_app(
        {"FORCE_HTTPS": True}, reviews_collection=collection, tmdb_client=tmdb_client
    )

    response = app.test_client().get("/api/reviews")

    assert response.status_code == 302
    assert response.headers["Location"].startswith("https://")


def test_configure_logging_attaches_one_handler():
    configure_logging("warning")
    configured = configure_logging("info")

    assert configured is logger
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    assert logger.propagate is False
