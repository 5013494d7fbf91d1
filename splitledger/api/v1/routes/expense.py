from fastapi import APIRouter
from splitledger.schemas.expense import SplitsRequest, SplitsOut
from splitledger.core.utils import to_money
from splitledger.services.split_services import compute_splits

router = APIRouter()

@router.post("/splits", response_model=SplitsOut, description="preview the shares of an expense")
async def preview_splits(data: SplitsRequest):
    shares = compute_splits(data.amount, data.split_type, data.splits)
    return SplitsOut(amount=to_money(data.amount), split_type=data.split_type, shares=shares)
