import logging
from decimal import Decimal
from typing import List, Sequence

from splitledger.core.exceptions import ValidationError
from splitledger.core.utils import qround, to_money
from splitledger.schemas.expense import SplitInput, SplitShare, SplitType

logger = logging.getLogger(__name__)


def compute_splits(amount, split_type: SplitType, splits: Sequence[SplitInput]) -> List[SplitShare]:
    """
    Turn an expense total into per-participant shares that sum to the total.

    EQUAL: every participant gets total / N rounded half-up to the cent; the
    rounding remainder (possibly negative) goes to the first participant in
    input order. EXACT: declared split values are passed through unchanged and
    must add up to the total.
    """
    total = to_money(amount)
    if total != Decimal(str(amount)):
        raise ValidationError("Expense amount must have at most two decimal places")
    try:
        split_type = SplitType(split_type)
    except ValueError:
        raise ValidationError(f"Unsupported split type: {split_type!r}")

    # 1. Validate amount and participants
    if total <= 0:
        raise ValidationError("Expense amount must be positive")

    if not splits:
        raise ValidationError("At least one split is required")

    user_ids = [s.user_id for s in splits]
    if len(user_ids) != len(set(user_ids)):
        raise ValidationError("Duplicate users found in splits")

    # 2. Compute shares
    if split_type == SplitType.EQUAL:
        shares = _equal_shares(total, splits)
    else:
        shares = _exact_shares(total, splits)

    logger.debug(
        "Splits computed",
        extra={"split_type": split_type.value, "amount": str(total), "participants": len(shares)},
    )
    return shares


def _equal_shares(total: Decimal, splits: Sequence[SplitInput]) -> List[SplitShare]:
    count = Decimal(len(splits))
    base_share = qround(total / count)
    remainder = total - base_share * count

    shares = []
    for i, s in enumerate(splits):
        amt = base_share + remainder if i == 0 else base_share
        shares.append(SplitShare(user_id=s.user_id, split_type=SplitType.EQUAL, share_amount=amt))

    return shares


def _exact_shares(total: Decimal, splits: Sequence[SplitInput]) -> List[SplitShare]:
    declared_sum = Decimal("0")
    shares = []

    for s in splits:
        if s.split_value is None:
            raise ValidationError(f"Split value is required for EXACT split (user {s.user_id})")

        value = to_money(s.split_value)
        if value != s.split_value:
            raise ValidationError(f"Split value must have at most two decimal places (user {s.user_id})")
        if value < 0:
            raise ValidationError(f"Split value cannot be negative (user {s.user_id})")

        declared_sum += value
        shares.append(
            SplitShare(user_id=s.user_id, split_type=SplitType.EXACT, split_value=value, share_amount=value)
        )

    if declared_sum != total:
        raise ValidationError(
            f"Sum of splits must equal total amount: splits sum to {qround(declared_sum)}, "
            f"total is {total} (difference {qround(total - declared_sum)})"
        )

    return shares
