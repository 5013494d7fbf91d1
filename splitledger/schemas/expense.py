from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict


class SplitType(str, Enum):
    EQUAL = "EQUAL"
    EXACT = "EXACT"


class SplitInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    split_value: Decimal | None = None


class SplitsRequest(BaseModel):
    amount: Decimal
    split_type: SplitType = SplitType.EQUAL
    splits: List[SplitInput]


class SplitShare(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    split_type: SplitType
    split_value: Decimal | None = None
    share_amount: Decimal


class SplitsOut(BaseModel):
    amount: Decimal
    split_type: SplitType
    shares: List[SplitShare]
