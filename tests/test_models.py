from datetime import date

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from findata.models.category import Category
from findata.models.transaction import Transaction
from findata.models.user import User


async def make_user(session, email="owner@example.com"):
    user = User(email=email, password_hash="x", company_name="Owner Ltda")
    session.add(user)
    await session.flush()
    return user


@pytest.mark.parametrize("overrides", [{"amount": 0}, {"amount": -1}, {"type": "transfer"}])
async def test_transaction_check_constraints(app, overrides):
    async with app.state.db.session_factory() as session:
        user = await make_user(session)
        values = dict(
            user_id=user.id, type="expense", amount=10, description="d", category="c",
            transaction_date=date(2024, 1, 1),
        )
        values.update(overrides)
        session.add(Transaction(**values))

        with pytest.raises(IntegrityError):
            await session.commit()


async def test_email_is_unique(app):
    async with app.state.db.session_factory() as session:
        await make_user(session, "same@example.com")
        await session.commit()
        session.add(User(email="same@example.com", password_hash="y", company_name="Outra"))

        with pytest.raises(IntegrityError):
            await session.commit()


async def test_deleting_user_cascades_to_owned_rows(app):
    async with app.state.db.session_factory() as session:
        user = await make_user(session)
        session.add(Transaction(
            user_id=user.id, type="income", amount=5, description="d", category="c",
            transaction_date=date(2024, 1, 1),
        ))
        session.add(Category(user_id=user.id, name="Minha", type="income"))
        await session.commit()

        await session.delete(user)
        await session.commit()

        assert await session.scalar(select(func.count(Transaction.id))) == 0
        assert await session.scalar(
            select(func.count(Category.id)).where(Category.user_id.is_not(None))
        ) == 0
        # Global categories are untouched
        assert await session.scalar(select(func.count(Category.id))) > 0


async def test_global_category_names_are_unique_per_type(app):
    async with app.state.db.session_factory() as session:
        session.add(Category(user_id=None, name="Salário", type="income"))

        with pytest.raises(IntegrityError):
            await session.commit()


async def test_users_may_reuse_a_global_category_name(app):
    async with app.state.db.session_factory() as session:
        user = await make_user(session)
        session.add(Category(user_id=user.id, name="Salário", type="income"))
        session.add(Category(user_id=None, name="Salário", type="expense"))
        await session.commit()

        total = await session.scalar(select(func.count(Category.id)).where(Category.name == "Salário"))

    assert total == 3
