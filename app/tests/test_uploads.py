import asyncio

import pytest

from app import config
from app.uploads import routes as upload_routes

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "UPLOAD_DIR", tmp_path / "uploads")
    return tmp_path / "uploads"


def test_upload_profile_picture(client, upload_dir):
    res = client.post("/api/upload/profile-picture", files={"profilePicture": ("me.png", PNG, "image/png")})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["url"] == f"/uploads/{data['filename']}"
    assert data["filename"].startswith("profilePicture-")
    assert (upload_dir / data["filename"]).read_bytes() == PNG


def test_upload_rejects_non_image(client, upload_dir):
    res = client.post("/api/upload/profile-picture", files={"profilePicture": ("notes.txt", b"hello", "text/plain")})
    assert res.status_code == 400
    assert res.json()["message"] == "Only image files are allowed"


def test_upload_rejects_large_file(client, upload_dir, monkeypatch):
    monkeypatch.setattr(config, "MAX_UPLOAD_BYTES", 10)
    res = client.post("/api/upload/profile-picture", files={"profilePicture": ("me.png", PNG, "image/png")})
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "profilePicture"


def test_upload_requires_file(client, upload_dir):
    res = client.post("/api/upload/profile-picture")
    assert res.status_code == 400


def test_upload_rejects_empty_file(client, upload_dir):
    res = client.post("/api/upload/profile-picture", files={"profilePicture": ("me.png", b"", "image/png")})
    assert res.status_code == 400
    assert res.json()["message"] == "No file uploaded"


def test_upload_accepts_file_at_limit(client, upload_dir, monkeypatch):
    monkeypatch.setattr(config, "MAX_UPLOAD_BYTES", len(PNG))
    res = client.post("/api/upload/profile-picture", files={"profilePicture": ("me.png", PNG, "image/png")})
    assert res.status_code == 200


def test_upload_writes_file_off_the_event_loop(client, upload_dir, monkeypatch):
    calls = []
    save = upload_routes._save

    def tracking_save(destination, content):
        try:
            asyncio.get_running_loop()
            calls.append("event loop")
        except RuntimeError:
            calls.append("worker thread")
        save(destination, content)

    monkeypatch.setattr(upload_routes, "_save", tracking_save)
    res = client.post("/api/upload/profile-picture", files={"profilePicture": ("me.png", PNG, "image/png")})
    assert res.status_code == 200
    assert calls == ["worker thread"]
