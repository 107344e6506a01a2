from sqlalchemy import select

from findata.crud.category import DEFAULT_CATEGORIES, seed_default_categories
from findata.models.category import Category


async def test_lists_seeded_global_categories_ordered(client, auth_headers):
    headers = await auth_headers()

    response = await client.get("/api/categories", headers=headers)

    assert response.status_code == 200
    categories = response.json()
    assert len(categories) == len(DEFAULT_CATEGORIES)
    assert all(c["user_id"] is None for c in categories)
    keys = [(c["type"], c["name"]) for c in categories]
    assert keys == sorted(keys)


async def test_seeding_is_idempotent(app):
    async with app.state.db.session_factory() as session:
        created = await seed_default_categories(session)

    assert created == []


async def test_custom_categories_are_only_visible_to_owner(app, client, auth_headers):
    alice = await auth_headers("alice@example.com")
    bob = await auth_headers("bob@example.com")
    alice_id = (await client.get("/api/users/me", headers=alice)).json()["id"]

    async with app.state.db.session_factory() as session:
        session.add(Category(user_id=alice_id, name="Consultoria", type="income"))
        await session.commit()

    alice_view = (await client.get("/api/categories", headers=alice)).json()
    bob_view = (await client.get("/api/categories", headers=bob)).json()

    custom = [c for c in alice_view if c["user_id"] == alice_id]
    assert len(custom) == 1
    assert custom[0]["color"] == "#666666"
    assert len(alice_view) == len(DEFAULT_CATEGORIES) + 1
    assert len(bob_view) == len(DEFAULT_CATEGORIES)


async def test_categories_require_authentication(client):
    response = await client.get("/api/categories")

    assert response.status_code == 401


async def test_concurrent_seed_loses_gracefully(app):
    async with app.state.db.session_factory() as session:
        async def nothing_seeded_yet(*args, **kwargs):
            return 0

        # Another worker already inserted the rows after our count came back empty
        session.scalar = nothing_seeded_yet
        created = await seed_default_categories(session)

    assert created == []
    async with app.state.db.session_factory() as session:
        rows = (await session.execute(select(Category).where(Category.user_id.is_(None)))).scalars().all()
    assert len(rows) == len(DEFAULT_CATEGORIES)
