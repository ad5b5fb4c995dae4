"""Shared test fixtures."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from microthemes.config import get_settings


def write_theme(root: Path, slug: str, name: str) -> None:
    path = root / slug
    path.mkdir(parents=True)
    (path / "theme.yaml").write_text(f"name: {name}\n")
    (path / "index.html").write_text(f"<html><body><h1>{name}</h1></body></html>")
    (path / "styles.css").write_text(f"/* {slug} */")


@pytest.fixture
def site_dirs(tmp_path: Path, monkeypatch) -> Path:
    """Site with a default theme and two microsites, configured via env vars."""
    themes_root = tmp_path / "themes"
    microsites_root = tmp_path / "microsites"
    write_theme(themes_root, "default", "Default")
    write_theme(themes_root, "dark", "Dark")
    write_theme(microsites_root, "client-a", "Client A")
    write_theme(microsites_root, "client-b", "Client B")

    monkeypatch.setenv("THEMES_ROOT", str(themes_root))
    monkeypatch.setenv("MICROSITES_ROOT", str(microsites_root))
    monkeypatch.setenv("SITE_URL", "http://testserver/")
    monkeypatch.setenv("DEFAULT_THEME", "default")
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def client(site_dirs: Path) -> TestClient:
    from microthemes.main import app

    return TestClient(app)
