import heapq
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Dict, List, Tuple

from splitledger.core.exceptions import ValidationError

getcontext().prec = 28
CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

Transfer = Tuple[int, int, Decimal]


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_money(value) -> Decimal:
    """Coerce int, str or Decimal to a scale-2 Decimal. Floats are rejected."""
    if isinstance(value, (bool, float)):
        raise ValidationError(f"Money values must be exact decimals, got {type(value).__name__}")

    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value))
        if not d.is_finite():
            raise ValidationError(f"Invalid money value: {value!r}")
        # quantize overflows past the context precision
        return qround(d)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid money value: {value!r}")


def to_exact_money(value) -> Decimal:
    """Like to_money, but refuses values that would change when rounded to the cent."""
    d = to_money(value)
    if d != Decimal(str(value)):
        raise ValidationError(f"Money values must have at most two decimal places, got {value!r}")
    return d


def simplify_debts(net_map: Dict[int, Decimal]) -> List[Transfer]:
    """
    Greedy netting of a balance map into (from_id, to_id, amount) transfers.

    Largest creditor is matched with largest debtor on every step; ties go to
    the lower user id. Every step zeroes at least one side, so the result has
    at most (nonzero users - 1) entries. Not guaranteed to be the global
    minimum number of transfers.
    """
    # heap keys: creditors by (-balance, uid), debtors by (balance, uid)
    creditors: List[Tuple[Decimal, int]] = []
    debtors: List[Tuple[Decimal, int]] = []

    for uid, bal in net_map.items():
        bal = qround(bal)
        if bal > 0:
            creditors.append((-bal, uid))
        elif bal < 0:
            debtors.append((bal, uid))

    heapq.heapify(creditors)
    heapq.heapify(debtors)

    transfers: List[Transfer] = []

    while creditors and debtors:
        neg_cred, cred_id = heapq.heappop(creditors)
        debt_bal, debt_id = heapq.heappop(debtors)
        cred_amt = -neg_cred

        pay_amt = qround(min(cred_amt, -debt_bal))

        transfers.append((debt_id, cred_id, pay_amt))

        new_cred = qround(cred_amt - pay_amt)
        new_debt = qround(debt_bal + pay_amt)

        if new_cred > 0:
            heapq.heappush(creditors, (-new_cred, cred_id))
        if new_debt < 0:
            heapq.heappush(debtors, (new_debt, debt_id))

    return transfers
