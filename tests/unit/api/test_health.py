from src.marketplace.core.services.database.db_session import DbSessionService


class TestHealth:
    def test_liveness(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy", "service": "marketplace-api"}

    def test_ready(self, client):
        resp = client.get("/health/ready")
        assert resp.status_code == 200
        assert resp.json()["checks"] == {"database": "healthy"}

    def test_not_ready_when_database_is_down(self, client, monkeypatch):
        monkeypatch.setattr(DbSessionService, "health_check", lambda self: False)

        resp = client.get("/health/ready")

        assert resp.status_code == 503
        assert resp.json()["status"] == "unhealthy"
