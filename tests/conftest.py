import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

import importlib
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from folio.auth.tokens import TokenSigner
from folio.auth.users import set_credential
from folio.core.settings import reset_settings
from folio.infra.document_store import JsonDocumentStore
from folio.infra.file_store import FileStore
from folio.services.content_service import ContentService, UploadedFile

ADMIN_USER = "admin"
ADMIN_PASSWORD = "correctpass"


@pytest.fixture()
def store(tmp_path: Path) -> JsonDocumentStore:
    return JsonDocumentStore(tmp_path / "data" / "db.json")


@pytest.fixture()
def files(tmp_path: Path) -> FileStore:
    return FileStore(tmp_path / "data" / "uploads", "/uploads")


@pytest.fixture()
def content(store, files) -> ContentService:
    svc = ContentService(store, files)
    svc.initialize()
    return svc


@pytest.fixture()
def admin_store(store) -> JsonDocumentStore:
    set_credential(store, ADMIN_USER, ADMIN_PASSWORD)
    return store


@pytest.fixture()
def signer() -> TokenSigner:
    return TokenSigner("test-secret", salt="folio.test", max_age=3600)


@pytest.fixture()
def cert_uploads():
    return {
        "certificatePdf": UploadedFile(filename="aws.pdf", content=b"%PDF-1.4 cert"),
        "certificateThumb": UploadedFile(filename="aws.PNG", content=b"\x89PNG thumb"),
    }


@pytest.fixture()
def app_module(tmp_path: Path, monkeypatch):
    """Reload folio.app against an isolated data directory with a seeded admin."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("FOLIO_DATA_DIR", str(data_dir))
    monkeypatch.setenv("FOLIO_SECRET_KEY", "test-secret")
    monkeypatch.delenv("FOLIO_DB_PATH", raising=False)
    monkeypatch.delenv("FOLIO_UPLOADS_DIR", raising=False)
    reset_settings()

    import folio.app as module
    module = importlib.reload(module)
    set_credential(module.STORE, ADMIN_USER, ADMIN_PASSWORD)
    yield module
    reset_settings()


@pytest.fixture()
def client(app_module) -> TestClient:
    return TestClient(app_module.app)


@pytest.fixture()
def auth_headers(client) -> dict:
    r = client.post("/api/auth/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}
