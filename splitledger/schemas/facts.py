"""Snapshot of group facts handed to the balance engine"""

from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from splitledger.core.utils import to_exact_money
from splitledger.schemas.expense import SplitType


class SettlementStatus(str, Enum):
    PENDING = "PENDING"
    MARKED_PAID = "MARKED_PAID"
    COMPLETED = "COMPLETED"


class SplitFacts(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    share_amount: Decimal
    split_type: SplitType = SplitType.EQUAL
    split_value: Decimal | None = None

    @field_validator("share_amount", "split_value")
    @classmethod
    def check_cents(cls, v):
        return v if v is None else to_exact_money(v)


class ExpenseFacts(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    payer_id: int
    amount: Decimal
    currency: str = "EUR"
    category_id: int | None = None
    description: str | None = None
    splits: List[SplitFacts] = Field(default_factory=list)

    @field_validator("amount")
    @classmethod
    def check_cents(cls, v):
        return to_exact_money(v)


class SettlementFacts(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    group_id: int | None = None
    payer_id: int
    payee_id: int
    amount: Decimal
    status: SettlementStatus = SettlementStatus.PENDING

    @field_validator("amount")
    @classmethod
    def check_cents(cls, v):
        return to_exact_money(v)


class GroupSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    group_id: int
    group_name: str | None = None
    member_ids: List[int]
    expenses: List[ExpenseFacts] = Field(default_factory=list)
    settlements: List[SettlementFacts] = Field(default_factory=list)


class Membership(BaseModel):
    model_config = ConfigDict(frozen=True)

    group_id: int
    group_name: str | None = None
