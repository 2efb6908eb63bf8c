"""Shared fixtures: a throwaway site root and an app built from explicit settings.

All HTTP calls go through FastAPI's TestClient; no port is opened.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from landing_server.config import Settings
from landing_server.models import PaymentsConfig
from landing_server.server import create_app


INDEX_HTML = "<!doctype html><title>Landing</title><h1>Привет</h1>\n"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 8


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Site directory with a few assets, plus a secret file beside (not in) it."""

    root = tmp_path / "site"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (root / "assets" / "style.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    (root / "assets" / "logo.png").write_bytes(PNG_BYTES)
    (root / "assets" / "LOGO.JPG").write_bytes(b"\xff\xd8\xff\xe0jpeg")
    (root / "data.bin").write_bytes(b"\x00\x01\x02")

    (tmp_path / "secret.txt").write_text("top secret\n", encoding="utf-8")
    return root


@pytest.fixture
def payments_config() -> PaymentsConfig:
    return PaymentsConfig(
        provider="mock",
        public_key="pk_test_fixture",
        return_url="http://localhost:3000/thanks",
        currency="RUB",
        locale="ru-RU",
    )


@pytest.fixture
def settings(site_root: Path, payments_config: PaymentsConfig) -> Settings:
    return Settings(port=3000, static_root=site_root, payments=payments_config)


@pytest.fixture
def client(settings: Settings) -> TestClient:
    with TestClient(create_app(settings)) as test_client:
        yield test_client
