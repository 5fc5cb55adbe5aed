import argparse
import asyncio
import sys
from pathlib import Path

"""
Replace the inventory with the rows of a CSV / Excel file.

Same column guessing as POST /inventory/upload.

Run:
- inside backend/: `uv run python scripts/import_inventory.py stock.xlsx`
- from repo root: `uv run python backend/scripts/import_inventory.py stock.csv`
"""

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from core.config import settings  # noqa: E402
from core.row_mapper import map_rows  # noqa: E402
from core.spreadsheet import read_rows  # noqa: E402
from db.database import Database  # noqa: E402
from db.store import InventoryStore  # noqa: E402


async def import_inventory(path: Path, dry_run: bool = False) -> int:
    items = map_rows(read_rows(path.name, path.read_bytes()))
    if dry_run:
        for item in items:
            print(f"{item['id']}\t{item['name']}\tqty={item['quantity']}\tprice={item['price']:.2f}")
        return len(items)

    database = Database(settings.database_url, echo=settings.database_echo)
    await database.open()
    try:
        async with database.session() as session:
            n = await InventoryStore(session).replace_all(items)
    finally:
        await database.close()
    return n


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("path", type=Path, help="CSV, XLS or XLSX file with name/quantity/price columns")
    parser.add_argument("--dry-run", action="store_true", help="Print the mapped items without touching the store")
    args = parser.parse_args()

    n = asyncio.run(import_inventory(args.path, dry_run=bool(args.dry_run)))
    print(f"[import_inventory] items={n}")
