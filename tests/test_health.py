def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert "ai_enabled" in body["features"]


def test_detailed_health(client):
    body = client.get("/health/detailed").json()

    assert body["status"] == "healthy"
    assert body["components"]["storage_backend"] == "memory"
    assert body["components"]["analysis_mode"] == "rule-based"
    assert body["components"]["storage_stats"]["memory_stats"]["documents"] == 0
