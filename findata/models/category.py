# findata/models/category.py
from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint, Index, text
from sqlalchemy.orm import relationship
from findata.core.database import Base

DEFAULT_COLOR = "#666666"


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (
        CheckConstraint("type IN ('income', 'expense')", name="ck_categories_type"),
        # One global row per (name, type); concurrent seeding fails here instead of duplicating
        Index(
            "uq_categories_global_name_type",
            "name",
            "type",
            unique=True,
            sqlite_where=text("user_id IS NULL"),
            postgresql_where=text("user_id IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    # NULL user_id marks a global (seeded) category
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    name = Column(String(length=100), nullable=False)
    type = Column(String(length=10), nullable=False)
    color = Column(String(length=7), nullable=False, default=DEFAULT_COLOR)

    user = relationship("User", back_populates="categories")

    def __repr__(self):
        return f"<Category name={self.name} type={self.type} user_id={self.user_id}>"
