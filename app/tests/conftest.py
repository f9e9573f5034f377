import os
import tempfile

os.environ["LOG_TO_FILE"] = "false"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="uploads-"))

import pytest
from fastapi.testclient import TestClient

from app import config
from app.main import app


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'games.db'}"
    monkeypatch.setattr(config, "DATABASE_URL", url)
    return url


@pytest.fixture
def client(database_url):
    with TestClient(app) as test_client:
        yield test_client
