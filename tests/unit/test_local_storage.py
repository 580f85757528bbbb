"""Tests for local upload storage."""
from pathlib import Path

import pytest

from app.exceptions import StorageError
from app.services.local_storage import (
    LocalStorageService,
    folder_size,
    format_size,
    sanitize_filename,
)


class TestHelpers:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("cat.jpg", "cat.jpg"),
            ("My Holiday (1).png", "My_Holiday_1.png"),
            ("фото.png", "фото.png"),
            ("Отпуск на море.JPG", "Отпуск_на_море.JPG"),
            ("★.png", "photo.png"),
            ("no extension", "no_extension"),
            ("../../etc/passwd", "passwd"),
            ("C:\\photos\\dog.gif", "dog.gif"),
            ("...", "photo"),
        ],
    )
    def test_sanitize_filename(self, raw, expected):
        assert sanitize_filename(raw) == expected

    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 bytes"),
            (1023, "1023 bytes"),
            (1024, "1.00 KB"),
            (1536, "1.50 KB"),
            (5 * 1024 ** 2, "5.00 MB"),
            (3 * 1024 ** 3, "3.00 GB"),
        ],
    )
    def test_format_size(self, size, expected):
        assert format_size(size) == expected

    def test_folder_size_is_recursive(self, tmp_path: Path):
        (tmp_path / "a.bin").write_bytes(b"x" * 10)
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.bin").write_bytes(b"x" * 5)

        assert folder_size(tmp_path) == 15
        assert folder_size(tmp_path / "missing") == 0


class TestLocalStorageService:

    def test_build_filename(self, tmp_path: Path):
        storage = LocalStorageService(tmp_path)
        assert storage.build_filename("my cat.jpg", now_ms=1700000000000) == "1700000000000-my_cat.jpg"
        assert storage.build_filename("фото.png", now_ms=1700000000000) == "1700000000000-фото.png"

    def test_resolve_stays_inside_upload_dir(self, tmp_path: Path):
        storage = LocalStorageService(tmp_path)
        assert storage.resolve("/uploads/../../secret.txt") == tmp_path / "secret.txt"

    @pytest.mark.asyncio
    async def test_save_and_delete(self, tmp_path: Path):
        storage = LocalStorageService(tmp_path / "uploads", "/uploads/")

        path = await storage.save("a.png", b"data")

        assert path.startswith("/uploads/")
        assert storage.resolve(path).read_bytes() == b"data"
        assert await storage.directory_size() == 4
        assert await storage.delete(path) is True
        assert await storage.delete(path) is False

    @pytest.mark.asyncio
    async def test_same_name_twice_gets_distinct_files(self, tmp_path: Path, monkeypatch):
        storage = LocalStorageService(tmp_path)
        monkeypatch.setattr("app.services.local_storage.time.time", lambda: 1700000000.0)

        first = await storage.save("a.png", b"1")
        second = await storage.save("a.png", b"2")

        assert first != second
        assert storage.resolve(first).read_bytes() == b"1"
        assert storage.resolve(second).read_bytes() == b"2"

    @pytest.mark.asyncio
    async def test_save_failure_raises_storage_error(self, tmp_path: Path):
        blocker = tmp_path / "uploads"
        blocker.write_bytes(b"not a directory")

        with pytest.raises(StorageError):
            await LocalStorageService(blocker).save("a.png", b"data")

    @pytest.mark.asyncio
    async def test_delete_many(self, tmp_path: Path):
        storage = LocalStorageService(tmp_path)
        paths = [await storage.save(f"{i}.png", b"x") for i in range(3)]

        assert await storage.delete_many(paths + ["/uploads/missing.png"]) == 3
