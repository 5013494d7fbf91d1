"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from decimal import Decimal
from typing import AsyncGenerator, Iterable, Tuple

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from splitledger.db.session import Base, get_db
from splitledger.main import create_app
from splitledger.models import Expense, ExpenseSplit, Group, GroupMember, Settlement
from splitledger.schemas.expense import SplitType
from splitledger.schemas.facts import SettlementStatus


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with the test database"""
    app = create_app()

    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def add_group(db: AsyncSession, name: str, member_ids: Iterable[int]) -> Group:
    group = Group(name=name)
    db.add(group)
    await db.flush()

    for uid in member_ids:
        db.add(GroupMember(group_id=group.id, user_id=uid))

    await db.commit()
    return group


async def add_expense(
    db: AsyncSession,
    group_id: int,
    paid_by: int,
    amount: str,
    shares: Iterable[Tuple[int, str]],
    split_type: SplitType = SplitType.EQUAL,
    is_deleted: bool = False,
) -> Expense:
    expense = Expense(group_id=group_id, paid_by=paid_by, amount=Decimal(amount), is_deleted=is_deleted)
    db.add(expense)
    await db.flush()

    for uid, share in shares:
        db.add(
            ExpenseSplit(
                expense_id=expense.id,
                user_id=uid,
                split_type=split_type,
                split_value=Decimal(share) if split_type == SplitType.EXACT else None,
                share_amount=Decimal(share),
            )
        )

    await db.commit()
    return expense


async def add_settlement(
    db: AsyncSession,
    group_id: int,
    payer_id: int,
    payee_id: int,
    amount: str,
    status: SettlementStatus,
) -> Settlement:
    settlement = Settlement(
        group_id=group_id, payer_id=payer_id, payee_id=payee_id, amount=Decimal(amount), status=status
    )
    db.add(settlement)
    await db.commit()
    return settlement
