import pytest
from fastapi.testclient import TestClient

from resume_studio.config import Settings
from resume_studio.main import create_app
from resume_studio.persistence import ResumeService
from resume_studio.schemas.document import ResumeDocument
from resume_studio.seed import SAMPLE_RESUME
from resume_studio.store import MemoryStorage


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        seed_demo=False,
        database_path="memory",
        session_secret="test-secret",
        password_rounds=4,
        export_delay_ms=10,
        preview_scale=0.9,
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def service(storage) -> ResumeService:
    return ResumeService(storage)


@pytest.fixture
def alice(storage):
    return storage.create_user("alice", "not-a-real-hash", "Alice").public()


@pytest.fixture
def bob(storage):
    return storage.create_user("bob", "not-a-real-hash", "Bob").public()


@pytest.fixture
def sample_document() -> ResumeDocument:
    return ResumeDocument.model_validate(SAMPLE_RESUME)


@pytest.fixture
def app(settings, storage):
    return create_app(settings, storage=storage)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def other_client(app):
    with TestClient(app) as c:
        yield c


def register(client: TestClient, username: str, password: str = "s3cret", name: str = "") -> dict:
    response = client.post(
        "/api/register", json={"username": username, "password": password, "name": name}
    )
    assert response.status_code == 201, response.text
    return response.json()
