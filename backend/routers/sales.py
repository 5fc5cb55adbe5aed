from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db.database import get_async_session
from db.store import SalesStore
from schemas.sales import SaleRecord

router = APIRouter()


@router.get("/", response_model=List[SaleRecord])
async def list_sales(db: AsyncSession = Depends(get_async_session)):
    """Every recorded sale, oldest first."""
    return await SalesStore(db).all()
