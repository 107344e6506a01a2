import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError as SettingsValidationError
from sqlalchemy.exc import OperationalError

from findata.core.config import Settings
from findata.core.db_utils import translate_db_errors
from findata.core.errors import InternalError


async def test_health(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["message"]
    assert body["timestamp"]


async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/api/nao-existe")

    assert response.status_code == 404
    assert response.json() == {"error": "Rota não encontrada"}


async def test_unexpected_exception_returns_generic_500(app):
    @app.get("/api/boom")
    async def boom():
        raise RuntimeError("connection string postgres://secret")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        response = await c.get("/api/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "Erro interno do servidor"}
    assert "secret" not in response.text


async def test_store_failure_is_not_leaked_to_client(client, auth_headers, monkeypatch):
    headers = await auth_headers()

    @translate_db_errors("list categories")
    async def failing_query(user_id, db):
        raise OperationalError("SELECT * FROM categories", {}, Exception("relation does not exist"))

    monkeypatch.setattr("findata.api.v1.routes.categories.get_categories_for_user", failing_query)

    response = await client.get("/api/categories", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Erro interno do servidor"}
    assert "relation" not in response.text


async def test_translate_db_errors_wraps_sqlalchemy_errors_only():
    @translate_db_errors("do something")
    async def store_failure():
        raise OperationalError("SELECT 1", {}, Exception("down"))

    @translate_db_errors("do something else")
    async def other_failure():
        raise KeyError("not a store error")

    with pytest.raises(InternalError) as excinfo:
        await store_failure()
    assert excinfo.value.status_code == 500
    assert isinstance(excinfo.value.__cause__, OperationalError)

    with pytest.raises(KeyError):
        await other_failure()


def test_settings_require_secret_key(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)

    with pytest.raises(SettingsValidationError):
        Settings(_env_file=None)


def test_settings_reject_blank_secret_key():
    with pytest.raises(SettingsValidationError):
        Settings(_env_file=None, SECRET_KEY="   ")


def test_settings_defaults():
    settings = Settings(_env_file=None, SECRET_KEY="k")

    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 24 * 60
    assert settings.BCRYPT_ROUNDS == 12
    assert settings.API_PREFIX == "/api"
    assert settings.is_sqlite
