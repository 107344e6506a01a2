from datetime import timedelta

import pytest

from conftest import PASSWORD, register
from findata.core.security import create_access_token, decode_access_token


async def test_register_returns_token_and_public_user(client, settings):
    response = await register(client, email="ana@example.com")

    assert response.status_code == 201
    body = response.json()
    assert body["message"]
    assert body["user"]["email"] == "ana@example.com"
    assert body["user"]["company_name"] == "Ana Consultoria"
    assert "password_hash" not in body["user"]
    assert "password" not in body["user"]
    assert decode_access_token(body["token"], settings) == {
        "id": body["user"]["id"],
        "email": "ana@example.com",
    }


async def test_register_then_login_round_trip(client, settings):
    registered = (await register(client, email="bruno@example.com")).json()

    response = await client.post("/api/login", json={"email": "bruno@example.com", "password": PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["id"] == registered["user"]["id"]
    assert decode_access_token(body["token"], settings)["id"] == registered["user"]["id"]


async def test_login_is_case_insensitive_on_email(client):
    await register(client, email="Carla@Example.com")

    response = await client.post("/api/login", json={"email": "carla@example.com", "password": PASSWORD})

    assert response.status_code == 200


async def test_duplicate_email_conflicts_regardless_of_password(client):
    first = await register(client, email="dup@example.com", password="primeira")
    second = await register(client, email="dup@example.com", password="outra-senha")

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json() == {"error": "Email já cadastrado"}


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"password": PASSWORD, "company_name": "ACME"}, "Email inválido ou ausente"),
        ({"email": "not-an-email", "password": PASSWORD, "company_name": "ACME"}, "Email inválido ou ausente"),
        ({"email": "x@example.com", "company_name": "ACME"}, "Senha deve ter pelo menos 6 caracteres"),
        ({"email": "x@example.com", "password": "12345", "company_name": "ACME"}, "Senha deve ter pelo menos 6 caracteres"),
        ({"email": "x@example.com", "password": PASSWORD}, "Nome da empresa é obrigatório"),
        ({"email": "x@example.com", "password": PASSWORD, "company_name": "   "}, "Nome da empresa é obrigatório"),
    ],
)
async def test_register_validation(client, payload, message):
    response = await client.post("/api/register", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": message}


async def test_login_does_not_reveal_which_credential_failed(client):
    await register(client, email="eva@example.com")

    wrong_password = await client.post("/api/login", json={"email": "eva@example.com", "password": "errada!"})
    unknown_email = await client.post("/api/login", json={"email": "ninguem@example.com", "password": PASSWORD})

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"error": "Credenciais inválidas"}


async def test_protected_endpoint_requires_token(client):
    response = await client.get("/api/transactions")

    assert response.status_code == 401
    assert response.json() == {"error": "Token de acesso requerido"}


async def test_malformed_token_is_forbidden(client):
    response = await client.get("/api/transactions", headers={"Authorization": "Bearer not.a.jwt"})

    assert response.status_code == 403
    assert response.json() == {"error": "Token inválido ou expirado"}


async def test_expired_token_is_forbidden(client, settings):
    body = (await register(client)).json()
    token = create_access_token(body["user"]["id"], body["user"]["email"], settings, timedelta(seconds=-10))

    response = await client.get("/api/dashboard", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


async def test_token_signed_with_another_secret_is_forbidden(client, settings):
    body = (await register(client)).json()
    other = settings.model_copy(update={"SECRET_KEY": "another-secret"})
    token = create_access_token(body["user"]["id"], body["user"]["email"], other)

    response = await client.get("/api/categories", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


async def test_tampered_token_does_not_decode(settings):
    token = create_access_token(1, "a@example.com", settings)

    assert decode_access_token(token, settings) == {"id": 1, "email": "a@example.com"}
    assert decode_access_token(token + "x", settings) is None


async def test_me_returns_public_projection(client, auth_headers):
    headers = await auth_headers("fabio@example.com")

    response = await client.get("/api/users/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["email"] == "fabio@example.com"
    assert set(response.json()) == {"id", "email", "company_name", "created_at"}


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"email": "gil@example.com"},
        {"password": PASSWORD},
        {"email": "   ", "password": PASSWORD},
        {"email": "gil@example.com", "password": ""},
    ],
)
async def test_login_requires_email_and_password(client, payload):
    await register(client, email="gil@example.com")

    response = await client.post("/api/login", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Email e senha são obrigatórios"}
