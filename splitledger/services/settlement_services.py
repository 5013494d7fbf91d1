"""
Settlement lifecycle: PENDING -> MARKED_PAID -> COMPLETED.

The payer marks a settlement as paid, the payee confirms it. Transitions only
move forward and return a new SettlementFacts; COMPLETED is terminal and is
the only state the balance engine counts.

Nothing in this package persists settlements; these are public helpers for
the workflow layer that does, so every status it stores went through a guard.
"""

import logging

from splitledger.core.exceptions import InvalidTransitionError, PermissionDeniedError, ValidationError
from splitledger.core.utils import to_exact_money
from splitledger.schemas.facts import SettlementFacts, SettlementStatus

logger = logging.getLogger(__name__)


def new_settlement(group_id: int, payer_id: int, payee_id: int, amount, settlement_id: int | None = None) -> SettlementFacts:
    amt = to_exact_money(amount)

    if amt <= 0:
        raise ValidationError("Settlement amount must be positive")

    if payer_id == payee_id:
        raise ValidationError("Payer and payee must be different users")

    return SettlementFacts(
        id=settlement_id,
        group_id=group_id,
        payer_id=payer_id,
        payee_id=payee_id,
        amount=amt,
        status=SettlementStatus.PENDING,
    )


def _advance(settlement: SettlementFacts, expected: SettlementStatus, target: SettlementStatus) -> SettlementFacts:
    if settlement.status != expected:
        raise InvalidTransitionError(
            f"Settlement must be in {expected.value} status to move to {target.value}, "
            f"current status is {settlement.status.value}"
        )

    logger.info(
        "Settlement advanced",
        extra={"settlement_id": settlement.id, "from_status": expected.value, "to_status": target.value},
    )
    return settlement.model_copy(update={"status": target})


def mark_paid(settlement: SettlementFacts, user_id: int) -> SettlementFacts:
    if settlement.payer_id != user_id:
        raise PermissionDeniedError("Only the payer can mark a settlement as paid")

    return _advance(settlement, SettlementStatus.PENDING, SettlementStatus.MARKED_PAID)


def confirm(settlement: SettlementFacts, user_id: int) -> SettlementFacts:
    if settlement.payee_id != user_id:
        raise PermissionDeniedError("Only the payee can confirm a settlement")

    return _advance(settlement, SettlementStatus.MARKED_PAID, SettlementStatus.COMPLETED)
