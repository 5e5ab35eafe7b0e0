import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.core.dev_seed import ensure_default_template
from backend.app.crud.crud_template import template_crud


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_create_template_defaults():
    client = TestClient(app)
    resp = client.post("/api/templates", json={"name": "Plain"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["name"] == "Plain"
    assert data["primary_color"] == "#3b82f6"
    assert data["is_default"] is False
    assert data["logo_url"] is None


@pytest.mark.parametrize("color", ["blue", "#12345", "3b82f6", "#zzzzzz"])
def test_invalid_primary_color_rejected(color):
    client = TestClient(app)
    resp = client.post("/api/templates", json={"name": "Bad", "primaryColor": color})
    assert resp.status_code == 422


def test_only_one_default_template():
    client = TestClient(app)
    first = client.post("/api/templates", json={"name": "First", "isDefault": True}).json()
    second = client.post("/api/templates", json={"name": "Second", "isDefault": True, "primaryColor": "#fff"}).json()

    assert client.get(f"/api/templates/{first['id']}").json()["is_default"] is False
    assert client.get(f"/api/templates/{second['id']}").json()["is_default"] is True

    resp = client.put(f"/api/templates/{first['id']}", json={"is_default": True})
    assert resp.status_code == 200
    assert resp.json()["is_default"] is True
    defaults = [t["name"] for t in client.get("/api/templates").json() if t["is_default"]]
    assert defaults == ["First"]


def test_update_and_delete_template():
    client = TestClient(app)
    template = client.post("/api/templates", json={"name": "Old"}).json()

    resp = client.put(
        f"/api/templates/{template['id']}",
        json={"name": "New", "logo_url": "https://cdn.example.com/logo.png", "primary_color": "#0f172a"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "New"
    assert data["logo_url"] == "https://cdn.example.com/logo.png"
    assert data["primary_color"] == "#0f172a"

    assert client.delete(f"/api/templates/{template['id']}").status_code == 204
    assert client.get("/api/templates").json() == []
    assert client.get(f"/api/templates/{template['id']}").status_code == 404


def test_default_template_seed(monkeypatch):
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    db = SessionLocal()
    try:
        ensure_default_template(db)
        ensure_default_template(db)
        templates = template_crud.get_multi(db)
        assert len(templates) == 1
        assert templates[0].name == "Default Template"
        assert templates[0].is_default is True
        assert template_crud.get_default(db).id == templates[0].id
    finally:
        db.close()


@pytest.mark.parametrize("field", ["name", "primary_color", "is_default"])
def test_update_rejects_null_required_fields(field):
    client = TestClient(app)
    template = client.post("/api/templates", json={"name": "Plain"}).json()

    resp = client.put(f"/api/templates/{template['id']}", json={field: None})
    assert resp.status_code == 422

    resp = client.put(f"/api/templates/{template['id']}", json={"logo_url": None})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Plain"
    assert resp.json()["primary_color"] == "#3b82f6"
