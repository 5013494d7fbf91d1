from decimal import Decimal
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from splitledger.core.exceptions import NotFoundError
from splitledger.core.utils import qround
from splitledger.models import Expense, Group, GroupMember, Settlement
from splitledger.schemas.facts import (
    ExpenseFacts,
    GroupSnapshot,
    Membership,
    SettlementFacts,
    SplitFacts,
)


def _money(value) -> Decimal:
    return qround(Decimal(str(value)))


async def find_group_snapshot(db: AsyncSession, group_id: int) -> GroupSnapshot | None:
    res = await db.execute(select(Group).where(Group.id == group_id))
    group = res.scalar_one_or_none()

    if not group:
        return None

    members_q = (
        select(GroupMember.user_id)
        .where(GroupMember.group_id == group_id)
        .order_by(GroupMember.id)
    )
    members_res = await db.execute(members_q)
    member_ids = list(members_res.scalars().all())

    expense_q = (
        select(Expense)
        .options(selectinload(Expense.splits))
        .where(Expense.group_id == group_id, Expense.is_deleted == False)
        .order_by(Expense.id)
        .execution_options(populate_existing=True)
    )
    expense_res = await db.execute(expense_q)

    expenses = [
        ExpenseFacts(
            id=e.id,
            payer_id=e.paid_by,
            amount=_money(e.amount),
            currency=e.currency,
            category_id=e.category_id,
            description=e.description,
            splits=[
                SplitFacts(
                    user_id=s.user_id,
                    share_amount=_money(s.share_amount),
                    split_type=s.split_type,
                    split_value=_money(s.split_value) if s.split_value is not None else None,
                )
                for s in sorted(e.splits, key=lambda s: s.id)
            ],
        )
        for e in expense_res.scalars().all()
    ]

    settlement_q = (
        select(Settlement)
        .where(Settlement.group_id == group_id)
        .order_by(Settlement.id)
        .execution_options(populate_existing=True)
    )
    settlement_res = await db.execute(settlement_q)

    settlements = [
        SettlementFacts(
            id=s.id,
            group_id=s.group_id,
            payer_id=s.payer_id,
            payee_id=s.payee_id,
            amount=_money(s.amount),
            status=s.status,
        )
        for s in settlement_res.scalars().all()
    ]

    return GroupSnapshot(
        group_id=group.id,
        group_name=group.name,
        member_ids=member_ids,
        expenses=expenses,
        settlements=settlements,
    )


async def load_group_snapshot(db: AsyncSession, group_id: int) -> GroupSnapshot:
    snapshot = await find_group_snapshot(db, group_id)

    if snapshot is None:
        raise NotFoundError(f"Group not found with id: {group_id}")

    return snapshot


async def list_memberships(db: AsyncSession, user_id: int) -> List[Membership]:
    q = (
        select(Group.id, Group.name)
        .join(GroupMember, GroupMember.group_id == Group.id)
        .where(GroupMember.user_id == user_id)
        .order_by(Group.id)
    )
    res = await db.execute(q)
    return [Membership(group_id=gid, group_name=name) for gid, name in res.all()]
