"""
Inventory and sales stores over one AsyncSession.

InventoryStore is a key-value store of items keyed by id: put is a whole-record
replace (last write wins), update merges a partial record into an existing one.
SalesStore is an append-only log with auto-assigned sale ids.

Neither store commits on its own except where noted; callers decide the
transaction boundary with ``commit()``.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from db.inventory.item import DEFAULT_CATEGORY, InventoryItem as InventoryItemModel
from db.sale import Sale as SaleModel

_ITEM_FIELDS = ("name", "category", "price", "cost", "quantity")


def _normalize_item(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(item["id"]),
        "name": item.get("name") or "",
        "category": item.get("category") or DEFAULT_CATEGORY,
        "price": float(item.get("price") or 0.0),
        "cost": None if item.get("cost") is None else float(item["cost"]),
        "quantity": int(item.get("quantity") or 0),
    }


class InventoryStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, item_id: str) -> Optional[Dict[str, Any]]:
        # populate_existing: bulk updates below bypass the identity map
        res = await self.db.execute(
            select(InventoryItemModel)
            .where(InventoryItemModel.id == item_id)
            .execution_options(populate_existing=True)
        )
        row = res.scalar_one_or_none()
        return row.to_schema if row else None

    async def all(self) -> List[Dict[str, Any]]:
        res = await self.db.execute(select(InventoryItemModel).order_by(InventoryItemModel.name.asc()))
        return [row.to_schema for row in res.scalars().all()]

    async def put_many(self, items: Iterable[Mapping[str, Any]]) -> int:
        n = 0
        latest: Dict[str, Dict[str, Any]] = {}
        for item in items:
            normalized = _normalize_item(item)
            latest[normalized["id"]] = normalized
            n += 1
        for values in latest.values():
            await self.db.merge(InventoryItemModel(**values))
        await self.db.flush()
        return n

    async def replace_all(self, items: Iterable[Mapping[str, Any]]) -> int:
        """Clear the inventory and insert ``items`` in one transaction."""
        await self.db.execute(delete(InventoryItemModel))
        n = await self.put_many(items)
        await self.db.commit()
        return n

    async def update(self, item_id: str, changes: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        row = await self.db.get(InventoryItemModel, item_id)
        if row is None:
            return None
        for field in _ITEM_FIELDS:
            if field in changes:
                setattr(row, field, changes[field])
        row.category = row.category or DEFAULT_CATEGORY
        await self.db.flush()
        return row.to_schema

    async def decrement_if_in_stock(self, item_id: str) -> bool:
        """Take one unit out of stock. False (and nothing changes) when quantity is already <= 0."""
        res = await self.db.execute(
            update(InventoryItemModel)
            .where(InventoryItemModel.id == item_id)
            .where(InventoryItemModel.quantity > 0)
            .values(quantity=InventoryItemModel.quantity - 1)
            .execution_options(synchronize_session=False)
        )
        return bool(res.rowcount)

    async def clear(self) -> int:
        res = await self.db.execute(delete(InventoryItemModel))
        await self.db.commit()
        return int(getattr(res, "rowcount", 0) or 0)

    async def commit(self) -> None:
        await self.db.commit()


class SalesStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        sale = SaleModel(
            item_id=str(record["item_id"]),
            name=record["name"],
            price=float(record["price"]),
            cost=None if record.get("cost") is None else float(record["cost"]),
            timestamp=record["timestamp"],
        )
        self.db.add(sale)
        await self.db.flush()
        return sale.to_schema

    async def all(self) -> List[Dict[str, Any]]:
        res = await self.db.execute(select(SaleModel).order_by(SaleModel.sale_id.asc()))
        return [row.to_schema for row in res.scalars().all()]

    async def clear(self) -> int:
        res = await self.db.execute(delete(SaleModel))
        await self.db.commit()
        return int(getattr(res, "rowcount", 0) or 0)

    async def commit(self) -> None:
        await self.db.commit()
