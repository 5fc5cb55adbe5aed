"""
Scan-to-sale: turn a decoded QR label into a sale.

The gate is linear: unknown id -> nothing happens; known id with no stock ->
nothing happens; otherwise one sale is appended and one unit leaves stock, in
the same transaction. The decrement is conditional on quantity > 0 so stock
never goes negative even if two scans of the last unit race each other.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from db.store import InventoryStore, SalesStore
from schemas.sales import ScanOutcome

logger = logging.getLogger(__name__)


def iso_now() -> str:
    # same shape as JavaScript's Date.toISOString(): 2024-05-01T10:20:30.123Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def record_scan(
    inventory: InventoryStore,
    sales: SalesStore,
    item_id: str,
    timestamp: Optional[str] = None,
) -> tuple[ScanOutcome, Optional[Dict[str, Any]]]:
    item = await inventory.get(item_id)
    if item is None:
        logger.warning("Scanned id %s not found in inventory", item_id)
        return ScanOutcome.NOT_FOUND, None

    if not item["quantity"] or item["quantity"] <= 0:
        logger.warning("Scanned item %s (%s) is out of stock", item_id, item["name"])
        return ScanOutcome.OUT_OF_STOCK, None

    if not await inventory.decrement_if_in_stock(item_id):
        # sold out between the lookup and the decrement
        await inventory.db.rollback()
        logger.warning("Scanned item %s (%s) is out of stock", item_id, item["name"])
        return ScanOutcome.OUT_OF_STOCK, None

    sale = await sales.add({
        "item_id": item["id"],
        "name": item["name"],
        "price": item["price"],
        "cost": item["cost"],
        "timestamp": timestamp or iso_now(),
    })
    await sales.commit()
    logger.info("Recorded sale %s of %s (%s)", sale["sale_id"], item["name"], item_id)
    return ScanOutcome.RECORDED, sale
