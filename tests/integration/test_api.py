"""Integration tests for the HTTP API: auth, résumé CRUD, download, AI drafts."""

import asyncio
import json

import httpx
import pytest

from resume_studio.auth import IdentityService
from resume_studio.config import Settings
from resume_studio.generation import DraftGenerator
from resume_studio.main import create_app
from resume_studio.store import MemoryStorage
from tests.conftest import register
from tests.fakes import FakeAdapter
from tests.unit.test_drafts import DRAFT


def _create(client, title="My CV", content=None, **extra):
    body = {"title": title, **extra}
    if content is not None:
        body["content"] = content
    return client.post("/api/resumes", json=body)


@pytest.mark.integration
def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.integration
@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/resumes"),
        ("get", "/api/resumes/1"),
        ("post", "/api/resumes"),
        ("put", "/api/resumes/1"),
        ("delete", "/api/resumes/1"),
        ("get", "/api/resumes/1/download"),
        ("post", "/api/ai/generate-resume"),
        ("get", "/api/user"),
        ("post", "/api/editor/sessions"),
    ],
)
def test_requires_session(client, method, path):
    kwargs = {"json": {}} if method in ("post", "put") else {}
    response = getattr(client, method)(path, **kwargs)
    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


@pytest.mark.integration
def test_register_login_logout(client):
    user = register(client, "alice", "pw", "Alice")
    assert user == {"id": user["id"], "username": "alice", "name": "Alice"}
    assert client.get("/api/user").json()["username"] == "alice"

    assert client.post("/api/logout").status_code == 204
    assert client.get("/api/user").status_code == 401

    assert client.post("/api/login", json={"username": "alice", "password": "bad"}).status_code == 401
    response = client.post("/api/login", json={"username": "alice", "password": "pw"})
    assert response.status_code == 200
    assert "password" not in response.json()


@pytest.mark.integration
def test_duplicate_registration_is_validation_failure(client, other_client):
    register(client, "alice")
    response = other_client.post("/api/register", json={"username": "alice", "password": "x"})
    assert response.status_code == 400
    assert response.json()["message"].startswith("username")


@pytest.mark.integration
def test_crud_flow(client, sample_document):
    register(client, "alice")

    created = _create(client, "My CV")
    assert created.status_code == 201
    resume = created.json()
    assert resume["title"] == "My CV"
    assert resume["isAiGenerated"] is False
    assert resume["content"]["personalInfo"]["fullName"] == ""

    content = sample_document.to_wire()
    updated = client.put(f"/api/resumes/{resume['id']}", json={"content": content})
    assert updated.status_code == 200
    assert updated.json()["content"] == content
    assert updated.json()["title"] == "My CV"

    fetched = client.get(f"/api/resumes/{resume['id']}")
    assert fetched.json()["content"] == content

    listing = client.get("/api/resumes").json()
    assert [r["id"] for r in listing] == [resume["id"]]

    assert client.delete(f"/api/resumes/{resume['id']}").status_code == 204
    assert client.get(f"/api/resumes/{resume['id']}").status_code == 404


@pytest.mark.integration
def test_other_user_is_forbidden(client, other_client, sample_document):
    register(client, "alice")
    register(other_client, "bob")
    resume = _create(client, "Private", sample_document.to_wire()).json()

    assert other_client.get(f"/api/resumes/{resume['id']}").status_code == 403
    assert other_client.put(f"/api/resumes/{resume['id']}", json={"title": "Hijacked"}).status_code == 403
    assert other_client.delete(f"/api/resumes/{resume['id']}").status_code == 403
    assert other_client.get(f"/api/resumes/{resume['id']}/download").status_code == 403
    assert other_client.get("/api/resumes").json() == []

    unchanged = client.get(f"/api/resumes/{resume['id']}").json()
    assert unchanged["title"] == "Private"
    assert unchanged["content"] == sample_document.to_wire()


@pytest.mark.integration
def test_concurrent_saves_last_writer_wins(client, other_client, sample_document):
    """Two logins of the same user load, edit and save; the later save wins."""
    register(client, "alice", "pw")
    other_client.post("/api/login", json={"username": "alice", "password": "pw"})
    resume = _create(client, "Shared", sample_document.to_wire()).json()

    doc_a = client.get(f"/api/resumes/{resume['id']}").json()["content"]
    doc_b = other_client.get(f"/api/resumes/{resume['id']}").json()["content"]
    doc_a["personalInfo"]["fullName"] = "From A"
    doc_b["skills"] = ["From B"]

    client.put(f"/api/resumes/{resume['id']}", json={"content": doc_a})
    other_client.put(f"/api/resumes/{resume['id']}", json={"content": doc_b})

    final = client.get(f"/api/resumes/{resume['id']}").json()["content"]
    assert final == doc_b
    assert final["personalInfo"]["fullName"] == "Demo User"


@pytest.mark.integration
@pytest.mark.parametrize(
    "body, field",
    [
        ({}, "title"),
        ({"title": ""}, "title"),
        ({"title": "CV", "content": {"skills": "React"}}, "content.skills"),
        ({"title": "CV", "content": {"experience": [{"current": "sometimes"}]}}, "content.experience.0.current"),
    ],
)
def test_create_validation_reports_first_field(client, body, field):
    register(client, "alice")
    response = client.post("/api/resumes", json=body)
    assert response.status_code == 400
    assert response.json()["message"].startswith(f"{field}:")
    assert client.get("/api/resumes").json() == []


@pytest.mark.integration
def test_update_missing_resume_is_not_found(client):
    register(client, "alice")
    assert client.put("/api/resumes/404", json={"title": "x"}).status_code == 404


@pytest.mark.integration
def test_download_is_printable_attachment(client, sample_document):
    register(client, "alice")
    resume = _create(client, "Sample Resume", sample_document.to_wire()).json()

    response = client.get(f"/api/resumes/{resume['id']}/download")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert response.headers["content-disposition"] == 'attachment; filename="Sample Resume.html"'
    assert "Demo User" in response.text
    assert "window.print()" in response.text


@pytest.mark.integration
def test_generate_resume(app, client):
    adapter = FakeAdapter(text=json.dumps(DRAFT))
    app.state.generator = DraftGenerator(adapter)
    register(client, "alice")

    response = client.post(
        "/api/ai/generate-resume",
        json={"jobRole": "Analyst", "experienceLevel": "Junior", "skills": "Maths"},
    )

    assert response.status_code == 200
    assert response.json()["personalInfo"]["fullName"] == "Ada Lovelace"
    assert response.json()["projects"][0]["techStack"] == ["Analytical Engine"]
    assert "Skills: Maths" in adapter.prompts[0][1]

    created = _create(client, "AI Draft", response.json(), isAiGenerated=True).json()
    assert created["isAiGenerated"] is True
    assert created["content"] == response.json()


@pytest.mark.integration
@pytest.mark.parametrize("adapter", [FakeAdapter(text="not json"), FakeAdapter(error="provider down")])
def test_generate_failure_is_server_error(app, client, adapter):
    app.state.generator = DraftGenerator(adapter)
    register(client, "alice")

    response = client.post(
        "/api/ai/generate-resume", json={"jobRole": "Analyst", "experienceLevel": "Junior"}
    )

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to generate resume"}


@pytest.mark.integration
def test_generate_requires_role_and_level(client):
    register(client, "alice")
    response = client.post("/api/ai/generate-resume", json={"jobRole": "Analyst"})
    assert response.status_code == 400
    assert response.json()["message"].startswith("experienceLevel")


@pytest.mark.integration
def test_demo_data_seeded_outside_production():
    storage = MemoryStorage()
    create_app(Settings(_env_file=None, environment="development", seed_demo=True), storage=storage)
    create_app(Settings(_env_file=None, environment="development", seed_demo=True), storage=storage)

    demo = storage.get_user_by_username("demo")
    assert demo is not None
    assert [r.title for r in storage.list_resumes(demo.id)] == ["Sample Resume"]


@pytest.mark.integration
def test_no_demo_data_in_production():
    storage = MemoryStorage()
    create_app(Settings(_env_file=None, environment="production", seed_demo=True), storage=storage)
    assert storage.get_user_by_username("demo") is None


@pytest.mark.integration
def test_login_runs_off_the_event_loop(app, storage):
    """Password checks must not stall other requests served by the same loop."""
    IdentityService(storage, rounds=12).register("slow", "pw")
    tick = 0.005

    async def worst_stall_during_logins() -> float:
        loop = asyncio.get_running_loop()
        worst = 0.0
        done = asyncio.Event()

        async def ticker():
            nonlocal worst
            last = loop.time()
            while not done.is_set():
                await asyncio.sleep(tick)
                now = loop.time()
                worst = max(worst, now - last - tick)
                last = now

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            watcher = asyncio.create_task(ticker())
            for _ in range(3):
                response = await client.post("/api/login", json={"username": "slow", "password": "pw"})
                assert response.status_code == 200
            done.set()
            await watcher
        return worst

    assert asyncio.run(worst_stall_during_logins()) < 0.1
