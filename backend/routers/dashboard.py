import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.sales_mirror import MirrorPublisher, get_mirror_publisher
from core.stats import compute_stats
from db.database import get_async_session
from db.store import InventoryStore, SalesStore
from schemas.stats import DashboardStats

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(db: AsyncSession = Depends(get_async_session)):
    sales = await SalesStore(db).all()
    inventory = await InventoryStore(db).all()
    return compute_stats(inventory, sales)


@router.post("/clear-sales")
async def clear_sales(
    db: AsyncSession = Depends(get_async_session),
    publisher: MirrorPublisher = Depends(get_mirror_publisher),
):
    """Clear the sales store; the mirror file is cleared in the background."""
    n = await SalesStore(db).clear()
    publisher.publish_clear()
    logger.info("Cleared %d sales", n)
    return {"ok": True, "message": "Sales data cleared."}
