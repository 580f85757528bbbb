"""Tests for settings validation."""
import pytest
from pydantic import ValidationError

from app.config import Settings
from app.schemas.theme import ThemeName


class TestSettings:

    def test_default_theme_accepts_known_theme(self):
        assert Settings(default_theme="nord").default_theme == ThemeName.NORD

    def test_default_theme_rejects_unknown_theme(self):
        with pytest.raises(ValidationError):
            Settings(default_theme="neon")

    def test_env_default_theme_is_validated(self, monkeypatch):
        monkeypatch.setenv("PHOTO_ALBUMS_DEFAULT_THEME", "neon")

        with pytest.raises(ValidationError):
            Settings()

    def test_blank_database_url_falls_back_to_sqlite(self):
        assert Settings(database_url="  ").database_url.startswith("sqlite+aiosqlite://")
