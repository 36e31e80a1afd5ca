"""
HTTP tests for the health endpoints.
"""


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "inkpress"
    assert body["version"] == "1.0.0"
    assert "timestamp" in body


async def test_ready_checks_database(client):
    response = await client.get("/ready")
    assert response.json() == {"status": "ready"}


async def test_live(client):
    assert (await client.get("/live")).json() == {"status": "alive"}
