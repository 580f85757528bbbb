"""Tests for the full-screen photo page."""
from app.services.photo import render_expand_page


def test_contain_is_default():
    page = render_expand_page("/uploads/1-cat.png")
    assert "object-fit: contain" in page
    assert "max-height: 100%" in page
    assert "<title>1-cat.png</title>" in page


def test_fill_and_cover():
    assert "min-height: 100vh" in render_expand_page("/uploads/a.png", "fill")
    cover = render_expand_page("/uploads/a.png", "cover")
    assert "object-fit: cover" in cover
    assert "min-height" not in cover


def test_unknown_fit_falls_back_to_contain():
    assert "object-fit: contain" in render_expand_page("/uploads/a.png", "stretch")


def test_path_is_escaped():
    page = render_expand_page('/uploads/a"><script>.png')
    assert "<script>" not in page
    assert "&quot;&gt;&lt;script&gt;" in page
