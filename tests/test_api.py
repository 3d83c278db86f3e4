"""
Contract tests for the store API.
"""

import io

import pytest
from fastapi.testclient import TestClient

from asset_manager.main import app
from asset_manager.services.factory import get_storage_service
from asset_manager.services.storage_service import StorageService, thumbnail_key
from asset_manager.storage.exceptions import StorageWriteError


@pytest.fixture
def service(local_backend, metadata_repository):
    return StorageService(local_backend, metadata_repository)


@pytest.fixture
def client(service):
    """Create test client wired to a local backend and SQLite metadata."""
    app.dependency_overrides[get_storage_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _upload(client, name="cat.jpg", data=b"\xff\xd8meow", content_type="image/jpeg"):
    return client.post("/store/upload", files={"file": (name, io.BytesIO(data), content_type)})


class TestHealthEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "asset-manager"
        assert data["storage"] == "local"

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["service"] == "Asset Manager"


class TestUploadEndpoint:

    def test_upload_returns_key(self, client):
        response = _upload(client)
        assert response.status_code == 201

        data = response.json()
        assert data["key"].endswith("-cat.jpg")
        assert data["filename"] == "cat.jpg"
        assert data["content_type"] == "image/jpeg"
        assert data["size"] == 6
        assert data["url"] == f"/store/view/{data['key']}"

    def test_write_failure_is_502(self, client, service, monkeypatch):
        def fail(*args, **kwargs):
            raise StorageWriteError("k", "quota exceeded")

        monkeypatch.setattr(service.backend, "put", fail)

        response = _upload(client)

        assert response.status_code == 502
        assert "quota exceeded" in response.json()["detail"]

    def test_missing_file_is_422(self, client):
        assert client.post("/store/upload").status_code == 422


class TestListEndpoint:

    def test_lists_uploaded_items(self, client):
        key = _upload(client).json()["key"]

        response = client.get("/store")
        assert response.status_code == 200

        data = response.json()
        assert data["backend"] == "local"
        assert data["total"] == 1
        item = data["items"][0]
        assert item["key"] == key
        assert item["filename"] == "cat.jpg"
        assert item["size"] == 6
        assert item["url"] == f"/store/view/{key}"
        assert "uploaded_at" in item and "last_modified" in item

    def test_empty_listing(self, client):
        assert client.get("/store").json() == {"backend": "local", "total": 0, "items": []}


class TestViewEndpoint:

    def test_streams_bytes(self, client):
        key = _upload(client).json()["key"]

        response = client.get(f"/store/view/{key}")

        assert response.status_code == 200
        assert response.content == b"\xff\xd8meow"
        assert response.headers["content-type"] == "image/jpeg"

    def test_serves_stored_content_type(self, client):
        key = _upload(client, name="scan", data=b"\x89PNG", content_type="image/png").json()["key"]

        response = client.get(f"/store/view/{key}")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"

    def test_nested_key(self, client, local_backend):
        local_backend.put("albums/2024/a.png", io.BytesIO(b"png"), "image/png")

        response = client.get("/store/view/albums/2024/a.png")

        assert response.status_code == 200
        assert response.content == b"png"

    def test_missing_is_404(self, client):
        assert client.get("/store/view/nope.png").status_code == 404


class TestDeleteEndpoint:

    def test_delete_then_view_is_404(self, client, local_backend):
        key = _upload(client).json()["key"]
        local_backend.put(thumbnail_key(key), io.BytesIO(b"t"), "image/jpeg")

        assert client.delete(f"/store/{key}").status_code == 204
        assert client.get(f"/store/view/{key}").status_code == 404
        assert client.get("/store").json()["total"] == 0

    def test_delete_unknown_is_404(self, client):
        assert client.delete("/store/never-uploaded.png").status_code == 404
