import pytest
from httpx import ASGITransport, AsyncClient

from findata.core.config import Settings
from findata.main import create_app, init_db

PASSWORD = "s3nha-segura"


@pytest.fixture
def settings(tmp_path):
    """
    Fresh settings per test: own secret, own SQLite file, cheap bcrypt.
    """
    return Settings(
        _env_file=None,
        SECRET_KEY="test-secret-key",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'findata_test.db'}",
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture
async def app(settings):
    application = create_app(settings)
    await init_db(application.state.db)
    yield application
    await application.state.db.dispose()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def register(client, email="ana@example.com", password=PASSWORD, company_name="Ana Consultoria"):
    return await client.post(
        "/api/register",
        json={"email": email, "password": password, "company_name": company_name},
    )


@pytest.fixture
def auth_headers(client):
    """Factory: registers a user and returns the Authorization header for it."""
    async def make(email="ana@example.com"):
        response = await register(client, email=email)
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return make


@pytest.fixture
def create_transaction(client):
    async def make(headers, **overrides):
        payload = {
            "type": "expense",
            "amount": 50.0,
            "description": "Almoço com cliente",
            "category": "Alimentação",
            "transaction_date": "2024-01-10",
        }
        payload.update(overrides)
        response = await client.post("/api/transactions", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["transaction"]
    return make
