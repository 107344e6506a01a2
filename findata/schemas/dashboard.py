# findata/schemas/dashboard.py
from typing import List
from pydantic import BaseModel

from findata.schemas.transaction import TransactionRead, TransactionType


class DashboardSummary(BaseModel):
    totalIncome: float
    totalExpenses: float
    balance: float


class CategoryTotal(BaseModel):
    category: str
    type: TransactionType
    total: float


class MonthlyTotal(BaseModel):
    month: str  # YYYY-MM
    type: TransactionType
    total: float


class DashboardResponse(BaseModel):
    summary: DashboardSummary
    recentTransactions: List[TransactionRead]
    categoryBreakdown: List[CategoryTotal]
    monthlyTrend: List[MonthlyTotal]
