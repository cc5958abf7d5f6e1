from datetime import datetime, timedelta, timezone


def test_health_returns_ok_with_timestamp(client):
    """GET /health returns 200 with status ok and an ISO-8601 UTC timestamp."""
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["timestamp"].endswith("Z")

    timestamp = datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))
    assert timestamp.tzinfo is not None
    assert abs(datetime.now(timezone.utc) - timestamp) < timedelta(minutes=1)


def test_health_does_not_touch_database(broken_db_client):
    """Liveness stays green even when the database is unreachable."""
    response = broken_db_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_readiness_reports_database_ok(client):
    response = client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "ok"
    assert data["timestamp"].endswith("Z")


def test_readiness_returns_503_when_database_unavailable(broken_db_client):
    response = broken_db_client.get("/health/ready")

    assert response.status_code == 503
    assert response.json() == {
        "detail": "Database is unavailable",
        "code": "DATABASE_UNAVAILABLE",
    }


def test_unknown_route_returns_404(client):
    response = client.get("/api/users")

    assert response.status_code == 404
