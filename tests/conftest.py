import pytest
from fastapi.testclient import TestClient

import config
import main
from auth import AdminCredentials
from database import FileSnapshotStorage
from schemas import StoreState
from store import ContentStore

ADMIN_EMAIL = "admin@camara.studio"
ADMIN_PASSWORD = "admin123"


@pytest.fixture(scope="session")
def credentials() -> AdminCredentials:
    # Hashing is deliberately slow, do it once per run
    return AdminCredentials.from_plain(ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def storage(tmp_path) -> FileSnapshotStorage:
    return FileSnapshotStorage(str(tmp_path / "store"))


@pytest.fixture
def store(storage, credentials) -> ContentStore:
    """Store seeded with the studio's default content."""
    return ContentStore(storage, credentials=credentials)


@pytest.fixture
def empty_store(storage, credentials) -> ContentStore:
    return ContentStore(storage, state=StoreState(), credentials=credentials)


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setattr(config, "UPLOAD_STEP_DELAY", 0)
    main.app.dependency_overrides[main.get_store] = lambda: store
    with TestClient(main.app) as c:
        yield c
    main.app.dependency_overrides.clear()
    main.upload_sessions.clear()


@pytest.fixture
def admin_client(client):
    response = client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client
