import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.checkout import record_scan
from core.labels import parse_label
from core.sales_mirror import MirrorPublisher, get_mirror_publisher
from db.database import get_async_session
from db.store import InventoryStore, SalesStore
from schemas.sales import SaleIn, ScanOutcome, ScanRequest, ScanResult

logger = logging.getLogger(__name__)

router = APIRouter()


def mirror_record(sale: Dict[str, Any]) -> Dict[str, Any]:
    """Sale as stored in the flat-file mirror: wire field names, no sale id."""
    return SaleIn(**sale).model_dump(by_alias=True)


@router.post("/", response_model=ScanResult)
async def scan(
    body: ScanRequest,
    db: AsyncSession = Depends(get_async_session),
    publisher: MirrorPublisher = Depends(get_mirror_publisher),
):
    """
    Register a sale for a scanned label.

    Send either the raw decoded QR text (``decodedText``) or an ``itemId``.
    Unknown ids and out-of-stock items are no-ops and report why in ``outcome``.
    """
    item_id = (body.item_id or "").strip()
    if not item_id:
        if not body.decoded_text:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Either 'decodedText' or 'itemId' must be provided",
            )
        try:
            item_id = parse_label(body.decoded_text)
        except ValueError:
            logger.warning("Failed to parse QR code %r", body.decoded_text)
            return ScanResult(outcome=ScanOutcome.INVALID)

    outcome, sale = await record_scan(InventoryStore(db), SalesStore(db), item_id)
    if sale is not None:
        publisher.publish_sale(mirror_record(sale))
    return ScanResult(outcome=outcome, item_id=item_id, sale=sale)
