"""
Turn loosely-structured spreadsheet rows into inventory items.

Sellers export their stock lists from all kinds of tools, so column names are
not fixed. Each logical field has an ordered list of candidate column names;
the first one present in the row wins. When none match, the field falls back
to a column position (name=0, quantity=1, price=2, id=3).

The positional fallback silently picks the wrong column when a sheet is laid
out differently (e.g. price before quantity). That is a known limitation of
the heuristic, kept so that uploads never require a configuration step.
"""

import math
import re
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional

from db.inventory.item import DEFAULT_CATEGORY

DEFAULT_QUANTITY = 1
DEFAULT_PRICE = 0.0
# largest value an INTEGER column holds (signed 64-bit)
MAX_QUANTITY = 2**63 - 1

FIELD_ALIASES: Dict[str, tuple] = {
    "name": ("name", "Name", "productName", "ProductName", "description", "Description"),
    "quantity": ("quantity", "Quantity", "qty", "Qty", "quantityInStock", "QuantityInStock"),
    "price": ("price", "Price", "sellingPrice", "SellingPrice", "sell", "Sell"),
    "id": ("id", "ID", "Id", "productId", "ProductId"),
}

FIELD_POSITIONS: Dict[str, int] = {
    "name": 0,
    "quantity": 1,
    "price": 2,
    "id": 3,
}

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def is_blank_row(row: Optional[Mapping[str, Any]]) -> bool:
    if not row:
        return True
    return not any(_is_present(v) for v in row.values())


def resolve_field(row: Mapping[str, Any], field: str) -> Any:
    """Value for a logical field: first matching alias, else the positional column."""
    for alias in FIELD_ALIASES[field]:
        value = row.get(alias)
        if _is_present(value):
            return value

    keys = list(row.keys())
    position = FIELD_POSITIONS[field]
    if position < len(keys):
        value = row[keys[position]]
        if _is_present(value):
            return value
    return None


def parse_quantity(value: Any) -> int:
    if not _is_present(value):
        return DEFAULT_QUANTITY
    if isinstance(value, bool):
        return DEFAULT_QUANTITY
    if isinstance(value, float) and math.isinf(value):
        return DEFAULT_QUANTITY
    if isinstance(value, (int, float)):
        quantity = int(value)
    else:
        # leading-integer parse: "3.7" -> 3, "12 pcs" -> 12
        m = _INT_PREFIX.match(str(value))
        if not m:
            return DEFAULT_QUANTITY
        quantity = int(m.group(1))
    if quantity > MAX_QUANTITY:
        return DEFAULT_QUANTITY
    return max(quantity, 0)


def parse_price(value: Any) -> float:
    if not _is_present(value):
        return DEFAULT_PRICE
    if isinstance(value, bool):
        return DEFAULT_PRICE
    if isinstance(value, (int, float)):
        return float(value)
    m = _FLOAT_PREFIX.match(str(value))
    if not m:
        return DEFAULT_PRICE
    price = float(m.group(1))
    if math.isnan(price) or math.isinf(price):
        return DEFAULT_PRICE
    return price


def new_item_id() -> str:
    return str(uuid.uuid4())


def map_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    name = resolve_field(row, "name")
    raw_id = resolve_field(row, "id")

    item_id = str(raw_id).strip() if raw_id is not None else ""
    if not item_id:
        item_id = new_item_id()

    return {
        "id": item_id,
        "name": str(name).strip() if name is not None else "",
        "category": DEFAULT_CATEGORY,
        "price": parse_price(resolve_field(row, "price")),
        "cost": None,
        "quantity": parse_quantity(resolve_field(row, "quantity")),
    }


def map_rows(rows: Iterable[Optional[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    """Map every non-empty row; malformed rows get defaults instead of failing the batch."""
    return [map_row(row) for row in rows if not is_blank_row(row)]
