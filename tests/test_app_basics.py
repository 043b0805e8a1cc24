"""Health, envelope and error handler tests."""

from pathlib import Path

from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, inspect, text

from restaurant_hub.core.config import settings
from restaurant_hub.db.base import Base
from restaurant_hub.db.seed import ensure_admin_user
from restaurant_hub.models import User

ROOT = Path(__file__).resolve().parent.parent


def test_health_envelope(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "OK"
    assert body["data"]["environment"] == settings.app_env
    assert "timestamp" in body["data"]


def test_unknown_route_uses_failure_envelope(client: TestClient) -> None:
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}


def test_validation_errors_are_400_with_details(client: TestClient) -> None:
    response = client.post("/api/auth/login", json={})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"].startswith("email")
    assert isinstance(body["details"], list)


def test_admin_seed_is_opt_in(session_factory, monkeypatch) -> None:
    with session_factory() as db:
        assert ensure_admin_user(db) is False
        assert db.query(User).count() == 0

    monkeypatch.setattr(settings, "admin_email", "boss@example.com")
    monkeypatch.setattr(settings, "admin_password", "supersecret")
    with session_factory() as db:
        assert ensure_admin_user(db) is True
        assert ensure_admin_user(db) is True
        admins = db.query(User).filter(User.role == "admin").all()
        assert [admin.email for admin in admins] == ["boss@example.com"]


def test_migration_matches_models(tmp_path: Path) -> None:
    db_url = f"sqlite:///{tmp_path / 'migrated.db'}"
    config = Config()
    config.set_main_option("script_location", str(ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", db_url)

    command.upgrade(config, "head")

    engine = create_engine(db_url)
    inspector = inspect(engine)
    for table in Base.metadata.sorted_tables:
        migrated = {column["name"] for column in inspector.get_columns(table.name)}
        assert migrated == {column.name for column in table.columns}, table.name
    with engine.begin() as connection:
        connection.execute(
            text(
                "INSERT INTO users (email, password_hash, first_name, last_name, created_at, updated_at) "
                "VALUES ('d@example.com', 'x', 'D', 'E', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)"
            )
        )
        role, is_active = connection.execute(text("SELECT role, is_active FROM users")).one()
    assert role == "customer"
    assert bool(is_active) is True
    engine.dispose()
