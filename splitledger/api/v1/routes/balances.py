from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.db.session import get_db
from splitledger.schemas.balances import UserBalanceOut
from splitledger.services.balance_services import get_user_balances

router = APIRouter()

@router.get("/user/{user_id}", response_model=UserBalanceOut)
async def user_balance(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    return await get_user_balances(db, user_id)
