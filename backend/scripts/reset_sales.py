"""
Delete ALL recorded sales from the sales store.

Run inside backend/:
  uv run python scripts/reset_sales.py            # sales store only
  uv run python scripts/reset_sales.py --mirror   # also empty the flat-file mirror
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from core.config import settings  # noqa: E402
from core.sales_mirror import SalesMirror  # noqa: E402
from db.database import Database  # noqa: E402
from db.store import SalesStore  # noqa: E402


async def main(mirror: bool) -> None:
    database = Database(settings.database_url, echo=settings.database_echo)
    await database.open()
    try:
        async with database.session() as db:
            sales_n = await SalesStore(db).clear()
    finally:
        await database.close()
    print(f"Deleted sales: {sales_n}")

    if mirror:
        await SalesMirror(settings.sales_mirror_path).clear()
        print(f"Cleared mirror: {settings.sales_mirror_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--mirror", action="store_true", help="Also truncate the flat-file sales mirror")
    args = parser.parse_args()
    asyncio.run(main(mirror=bool(args.mirror)))
