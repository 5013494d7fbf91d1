from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.db.session import get_db
from splitledger.schemas.balances import GroupBalanceOut
from splitledger.services.balance_services import get_group_balances

router = APIRouter()

@router.get("/{group_id}/balances", response_model=GroupBalanceOut, description="net balances and simplified debts of a group")
async def group_balances(group_id: int, db: AsyncSession = Depends(get_db)):
    return await get_group_balances(db, group_id=group_id)
