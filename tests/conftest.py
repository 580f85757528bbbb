"""Test configuration and fixtures for Photo Albums.

Every test gets:
- an empty SQLite database
- an empty uploads directory
"""
import asyncio
import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient

# Ensure app is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment BEFORE importing app modules
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="photo_albums_tests_"))
os.environ["PHOTO_ALBUMS_DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'test.db'}"
os.environ["PHOTO_ALBUMS_UPLOADS_DIR"] = str(_TEST_ROOT / "uploads")
os.environ["PHOTO_ALBUMS_LOG_DIR"] = ""
os.environ["PHOTO_ALBUMS_MAX_UPLOAD_SIZE"] = str(1024 * 1024)

# Minimal PNG signature plus padding; the server does not decode images
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture(scope="session")
def uploads_dir() -> Path:
    """Upload directory used by the app under test."""
    return _TEST_ROOT / "uploads"


@pytest.fixture(scope="function")
def client(uploads_dir: Path) -> Generator[TestClient, None, None]:
    """Test client over a fresh database and an empty upload directory.

    Usage:
        def test_something(client):
            response = client.get("/albums/")
            assert response.status_code == 200
    """
    from app.database import drop_db
    from app.main import app

    asyncio.run(drop_db())
    shutil.rmtree(uploads_dir, ignore_errors=True)
    uploads_dir.mkdir(parents=True, exist_ok=True)

    # Lifespan creates the tables again
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def image_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture(scope="function")
def album(client: TestClient) -> Dict:
    """Create an album and return its JSON."""
    response = client.post("/albums/", json={"name": "Holidays", "description": "Summer"})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture(scope="function")
def upload(client: TestClient, image_bytes: bytes):
    """Upload helper: upload(album_id, filename="photo.png") -> photo JSON."""

    def _upload(album_id: int, filename: str = "photo.png", content_type: str = "image/png"):
        response = client.post(
            "/photos/upload",
            data={"album_id": str(album_id)},
            files={"photo": (filename, image_bytes, content_type)},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _upload


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)
