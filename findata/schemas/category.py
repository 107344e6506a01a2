# findata/schemas/category.py
from typing import Optional
from pydantic import BaseModel, ConfigDict

from findata.schemas.transaction import TransactionType


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[int] = None
    name: str
    type: TransactionType
    color: str
