"""
Theme API integration tests.
"""
from fastapi.testclient import TestClient


class TestTheme:
    """Single persisted theme row."""

    def test_default_theme(self, client: TestClient):
        assert client.get("/theme").json() == {"theme": "SpaceBlue"}

    def test_save_theme(self, client: TestClient):
        response = client.post("/theme", json={"theme": "dracula"})

        assert response.status_code == 200
        assert response.json() == {"message": "Theme saved", "theme": "dracula"}
        assert client.get("/theme").json() == {"theme": "dracula"}

    def test_save_theme_twice_overwrites(self, client: TestClient):
        client.post("/theme", json={"theme": "nord"})
        client.post("/theme", json={"theme": "RoseMoon"})

        assert client.get("/theme").json() == {"theme": "RoseMoon"}

    def test_theme_validation(self, client: TestClient):
        assert client.post("/theme", json={}).status_code == 422
        assert client.post("/theme", json={"theme": "neon"}).status_code == 422
