def test_health(app_client):
    r = app_client.get("/api/health")
    assert r.status_code == 200
    data = r.get_json()
    assert isinstance(data, dict)
    assert data.get("status") == "ok"
    assert data["db"]["ping"] is True
    assert data["db"]["counts"] == {"events": 0, "bookings": 0}
