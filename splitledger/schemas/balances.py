from decimal import Decimal
from typing import List

from pydantic import BaseModel


class BalanceOut(BaseModel):
    user_id: int
    balance: Decimal


class DebtOut(BaseModel):
    from_id: int
    to_id: int
    amount: Decimal


class GroupBalanceOut(BaseModel):
    group_id: int
    balances: List[BalanceOut]
    simplified_debts: List[DebtOut]


class UserGroupBalanceOut(BaseModel):
    group_id: int
    group_name: str | None = None
    balance: Decimal


class UserBalanceOut(BaseModel):
    user_id: int
    total_balance: Decimal
    group_balances: List[UserGroupBalanceOut]
    skipped_group_ids: List[int] = []
