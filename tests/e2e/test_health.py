"""End-to-end test for the health endpoint."""


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "test"

    def test_health_lists_oauth_providers(self, client):
        response = client.get("/health")

        # The mock OAuth component enables every provider
        assert sorted(response.json()["oauth_providers"]) == [
            "amazon",
            "google",
            "idme",
            "microsoft",
        ]
