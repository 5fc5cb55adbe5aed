import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError

from core.errors import MirrorError
from core.sales_mirror import SalesMirror, get_sales_mirror
from core.stats import compute_sales_report
from schemas.sales import SaleIn
from schemas.stats import SalesReport

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats", response_model=SalesReport)
async def mirror_stats(mirror: SalesMirror = Depends(get_sales_mirror)):
    """Cost/profit report computed from the flat-file sales log only."""
    try:
        return compute_sales_report(await mirror.read())
    except (MirrorError, KeyError, TypeError, ValueError) as e:
        logger.error("Failed to read sales data: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to read sales data",
        )


@router.post("/record-sale")
async def record_sale(request: Request, mirror: SalesMirror = Depends(get_sales_mirror)):
    # validated by hand so a bad body is a 400, not FastAPI's 422
    try:
        sale = SaleIn.model_validate(json.loads(await request.body()))
    except (ValueError, ValidationError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid body")

    try:
        await mirror.append(sale.model_dump(by_alias=True))
    except MirrorError as e:
        logger.error("Failed to record sale: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record sale",
        )
    return {"ok": True}


@router.post("/clear-data")
async def clear_data(mirror: SalesMirror = Depends(get_sales_mirror)):
    try:
        await mirror.clear()
    except MirrorError as e:
        logger.error("Failed to clear data: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to clear data",
        )
    return {"ok": True}
