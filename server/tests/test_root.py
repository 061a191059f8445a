"""Root and health endpoint tests."""


class TestHealth:

    def test_health_reports_backends(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["analytics_store"] == "InMemoryAnalyticsStore"
        assert data["identity_verifier"] == "StaticTokenVerifier"
        # fixture config has no storage credentials
        assert data["config_valid"] is False

    def test_root_lists_endpoints(self, client):
        data = client.get("/").json()
        assert data["endpoints"]["search"] == ["/search"]
        assert data["auth_mode"] == "static"
