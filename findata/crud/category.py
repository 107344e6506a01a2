# findata/crud/category.py
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func, or_
from typing import List

from findata.core.db_utils import translate_db_errors
from findata.models.category import Category

logger = logging.getLogger(__name__)

# Global categories available to every user (user_id is NULL)
DEFAULT_CATEGORIES: List[dict] = [
    {"name": "Salário", "type": "income", "color": "#4CAF50"},
    {"name": "Vendas", "type": "income", "color": "#2E7D32"},
    {"name": "Serviços", "type": "income", "color": "#66BB6A"},
    {"name": "Investimentos", "type": "income", "color": "#00897B"},
    {"name": "Outras Receitas", "type": "income", "color": "#9CCC65"},
    {"name": "Alimentação", "type": "expense", "color": "#F44336"},
    {"name": "Transporte", "type": "expense", "color": "#FF9800"},
    {"name": "Aluguel", "type": "expense", "color": "#795548"},
    {"name": "Fornecedores", "type": "expense", "color": "#9C27B0"},
    {"name": "Marketing", "type": "expense", "color": "#E91E63"},
    {"name": "Impostos", "type": "expense", "color": "#607D8B"},
    {"name": "Salários", "type": "expense", "color": "#3F51B5"},
    {"name": "Utilidades", "type": "expense", "color": "#00BCD4"},
    {"name": "Outras Despesas", "type": "expense", "color": "#666666"},
]


@translate_db_errors("list categories")
async def get_categories_for_user(user_id: int, db: AsyncSession) -> List[Category]:
    """Global categories plus the user's own, ordered by type then name."""
    result = await db.execute(
        select(Category)
        .where(or_(Category.user_id.is_(None), Category.user_id == user_id))
        .order_by(Category.type, Category.name, Category.id)
    )
    return list(result.scalars().all())


@translate_db_errors("seed default categories")
async def seed_default_categories(db: AsyncSession) -> List[Category]:
    """Create the global categories unless some already exist.

    Returns the list of categories that were created (empty if none were needed).
    """
    existing = await db.scalar(select(func.count(Category.id)).where(Category.user_id.is_(None)))
    if existing:
        return []

    categories_to_create = [
        Category(user_id=None, name=cat["name"], type=cat["type"], color=cat["color"])
        for cat in DEFAULT_CATEGORIES
    ]
    db.add_all(categories_to_create)
    try:
        await db.commit()
    except IntegrityError:
        # Another worker seeded between our count and our insert
        await db.rollback()
        logger.info("Global categories already seeded by another worker")
        return []
    logger.info(f"Seeded {len(categories_to_create)} global categories")
    return categories_to_create
