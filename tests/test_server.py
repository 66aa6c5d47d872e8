from io import BytesIO
import itertools

from PIL import Image
import pytest

from server.app import create_app
from server.config import ServerConfig
from server.store import JsonPhotoStore

PASSWORD = "secret"


def _jpeg() -> bytes:
    buf = BytesIO()
    Image.new("RGB", (32, 24), (200, 10, 10)).save(buf, "JPEG")
    return buf.getvalue()


@pytest.fixture
def config(tmp_path):
    return ServerConfig(
        admin_password=PASSWORD,
        data_dir=tmp_path / "data",
        public_dir=tmp_path / "public",
    )


@pytest.fixture
def client(config, monkeypatch):
    ids = itertools.count(1000)
    monkeypatch.setattr("server.app.millis_id", lambda: str(next(ids)))
    app = create_app(config)
    app.config["TESTING"] = True
    return app.test_client()


def _login(client):
    return client.post("/api/login", json={"password": PASSWORD})


def _upload(client, **fields):
    data = {"photo": (BytesIO(_jpeg()), "shot.jpg"), **fields}
    return client.post("/api/photos", data=data, content_type="multipart/form-data")


def test_login(client):
    bad = client.post("/api/login", json={"password": "nope"})
    assert bad.status_code == 401
    assert bad.get_json() == {"error": "Wrong password"}

    ok = _login(client)
    assert ok.status_code == 200
    assert "HttpOnly" in ok.headers["Set-Cookie"]


def test_writes_require_auth(client):
    assert _upload(client).status_code == 401
    assert client.put("/api/photos/1", json={"title": "x"}).status_code == 401
    resp = client.delete("/api/photos/1")
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Unauthorized"}


def test_admin_redirects_to_login(client):
    resp = client.get("/admin")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login.html")


def test_upload_missing_file(client):
    _login(client)
    resp = client.post("/api/photos", data={}, content_type="multipart/form-data")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "No file uploaded"}


def test_upload_list_update_delete(client, config):
    _login(client)

    first = _upload(client, title="Lake", category="nature", series="Alps")
    assert first.status_code == 201
    record = first.get_json()
    assert record["id"] == "1000"
    assert record["url"] == "/uploads/opt_1000.jpg"
    assert record["series"] == "Alps"
    assert record["date"].endswith("Z")
    assert record["exif"]["camera"] == "Unknown"
    assert (config.uploads_dir / "opt_1000.jpg").is_file()

    second = _upload(client).get_json()
    assert second["title"] == "Untitled"
    assert second["category"] == "nature"
    assert second["series"] == ""

    listing = client.get("/api/photos").get_json()
    assert [p["id"] for p in listing] == ["1001", "1000"]

    served = client.get("/uploads/opt_1000.jpg")
    assert served.status_code == 200
    assert served.data[:2] == b"\xff\xd8"

    updated = client.put("/api/photos/1000", json={"title": "Alpine Lake"}).get_json()
    assert updated["title"] == "Alpine Lake"
    assert updated["category"] == "nature"

    missing = client.put("/api/photos/nope", json={"title": "x"})
    assert missing.status_code == 404
    assert missing.get_json() == {"error": "Photo not found"}

    deleted = client.delete("/api/photos/1000")
    assert deleted.get_json() == {"message": "Photo deleted successfully"}
    assert not (config.uploads_dir / "opt_1000.jpg").exists()
    assert [p["id"] for p in client.get("/api/photos").get_json()] == ["1001"]


def test_upload_of_non_image_fails(client):
    _login(client)
    data = {"photo": (BytesIO(b"plain text"), "notes.txt")}
    resp = client.post("/api/photos", data=data, content_type="multipart/form-data")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Image processing failed"}
    assert client.get("/api/photos").get_json() == []


def test_store_tolerates_corrupt_file(tmp_path):
    path = tmp_path / "db.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonPhotoStore(path)
    assert store.read() == []

    store.append({"id": "1"})
    store.append({"id": "2"})
    assert [r["id"] for r in store.newest_first()] == ["2", "1"]
    assert store.remove("missing") is None
    assert store.update("1", {"title": None, "series": "S"}) == {"id": "1", "series": "S"}


def test_config_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("FOLIO_ADMIN_PASSWORD", "pw")
    monkeypatch.setenv("FOLIO_PORT", "8123")
    monkeypatch.setenv("FOLIO_DATA_DIR", str(tmp_path))
    config = ServerConfig.from_env()
    assert config.admin_password == "pw"
    assert config.port == 8123
    assert config.db_path == tmp_path / "db.json"
