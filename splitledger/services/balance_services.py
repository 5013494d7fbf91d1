import logging
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from splitledger.core.config import settings
from splitledger.core.exceptions import NotFoundError
from splitledger.core.utils import ZERO, qround, simplify_debts
from splitledger.schemas.balances import (
    BalanceOut,
    DebtOut,
    GroupBalanceOut,
    UserBalanceOut,
    UserGroupBalanceOut,
)
from splitledger.schemas.facts import (
    ExpenseFacts,
    GroupSnapshot,
    Membership,
    SettlementFacts,
    SettlementStatus,
)
from splitledger.services.fact_services import find_group_snapshot, list_memberships, load_group_snapshot

logger = logging.getLogger(__name__)

MISSING_GROUP_POLICIES = ("skip", "fail")


def compute_balances(
    member_ids: Iterable[int],
    expenses: Iterable[ExpenseFacts],
    settlements: Iterable[SettlementFacts],
) -> Dict[int, Decimal]:
    """
    Net balance per user: positive means the group owes them, negative means
    they owe the group. Every member is present, at 0.00 when idle. Split users
    who are no longer members are added so the map still sums to zero.
    """
    net: Dict[int, Decimal] = {uid: ZERO for uid in member_ids}

    for expense in expenses:
        net[expense.payer_id] = net.get(expense.payer_id, ZERO) + expense.amount

        for split in expense.splits:
            net[split.user_id] = net.get(split.user_id, ZERO) - split.share_amount

    # only confirmed settlements move money
    for settlement in settlements:
        if settlement.status != SettlementStatus.COMPLETED:
            continue
        net[settlement.payer_id] = net.get(settlement.payer_id, ZERO) + settlement.amount
        net[settlement.payee_id] = net.get(settlement.payee_id, ZERO) - settlement.amount

    return {uid: qround(amt) for uid, amt in net.items()}


def compute_group_balances(snapshot: GroupSnapshot) -> GroupBalanceOut:
    net = compute_balances(snapshot.member_ids, snapshot.expenses, snapshot.settlements)
    transfers = simplify_debts(net)

    logger.debug(
        "Group balances computed",
        extra={
            "group_id": snapshot.group_id,
            "members": len(net),
            "expenses": len(snapshot.expenses),
            "settlements": len(snapshot.settlements),
            "transfers": len(transfers),
        },
    )

    return GroupBalanceOut(
        group_id=snapshot.group_id,
        balances=[BalanceOut(user_id=uid, balance=amt) for uid, amt in net.items()],
        simplified_debts=[DebtOut(from_id=f, to_id=t, amount=a) for f, t, a in transfers],
    )


def compute_user_balances(
    user_id: int,
    memberships: Sequence[Membership],
    load_snapshot: Callable[[int], GroupSnapshot],
    on_missing: str = "skip",
) -> UserBalanceOut:
    """
    Sum a user's balance over every group they belong to.

    load_snapshot raises NotFoundError for a group whose facts are gone. With
    on_missing="skip" that group is logged, listed in skipped_group_ids and left
    out of the total; with on_missing="fail" the error propagates.
    """
    if on_missing not in MISSING_GROUP_POLICIES:
        raise ValueError(f"on_missing must be one of {MISSING_GROUP_POLICIES}, got {on_missing!r}")

    total = ZERO
    group_balances: List[UserGroupBalanceOut] = []
    skipped: List[int] = []

    for m in memberships:
        try:
            snapshot = load_snapshot(m.group_id)
        except NotFoundError:
            if on_missing == "fail":
                raise
            logger.warning(
                "Skipping group with unavailable facts",
                extra={"user_id": user_id, "group_id": m.group_id},
            )
            skipped.append(m.group_id)
            continue

        net = compute_balances(snapshot.member_ids, snapshot.expenses, snapshot.settlements)
        balance = net.get(user_id, ZERO)

        group_balances.append(
            UserGroupBalanceOut(group_id=m.group_id, group_name=m.group_name, balance=balance)
        )
        total += balance

    return UserBalanceOut(
        user_id=user_id,
        total_balance=qround(total),
        group_balances=group_balances,
        skipped_group_ids=skipped,
    )


async def get_group_balances(db: AsyncSession, group_id: int) -> GroupBalanceOut:
    snapshot = await load_group_snapshot(db, group_id)
    return compute_group_balances(snapshot)


async def get_user_balances(db: AsyncSession, user_id: int) -> UserBalanceOut:
    memberships = await list_memberships(db, user_id)

    # load everything first so the pure aggregation runs on one snapshot set
    snapshots: Dict[int, GroupSnapshot | None] = {
        m.group_id: await find_group_snapshot(db, m.group_id) for m in memberships
    }

    def load_snapshot(group_id: int) -> GroupSnapshot:
        if snapshots.get(group_id) is None:
            raise NotFoundError(f"Group not found with id: {group_id}")
        return snapshots[group_id]

    return compute_user_balances(
        user_id,
        memberships,
        load_snapshot,
        on_missing=settings.missing_group_policy,
    )
