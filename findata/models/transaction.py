# findata/models/transaction.py
from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Date, DateTime, CheckConstraint, Index
from sqlalchemy.orm import relationship
from findata.core.database import Base
from findata.models.user import utcnow

TRANSACTION_TYPES = ("income", "expense")


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        CheckConstraint("type IN ('income', 'expense')", name="ck_transactions_type"),
        Index("ix_transactions_user_date", "user_id", "transaction_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(length=10), nullable=False)
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    description = Column(String(length=255), nullable=False)
    category = Column(String(length=100), nullable=False)
    transaction_date = Column(Date, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction type={self.type} amount={self.amount} date={self.transaction_date} user_id={self.user_id}>"
