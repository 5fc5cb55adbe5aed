"""
Aggregations over inventory and sales snapshots.

Two variants exist on purpose:

- compute_stats joins the live inventory with the sales store (dashboard).
  Products are keyed by *name*, not id: two ids sharing a name are merged and
  an item renamed after a sale shows up under both names.
  ``total_items`` is the number of units handled since the last clear, i.e.
  current stock plus units sold. It is not the catalogue size, and it drifts
  when inventory is re-uploaded after sales.

- compute_sales_report only looks at the sale log (the flat-file mirror) and
  adds cost and profit. It never sees inventory.
"""

from typing import Any, Dict, Iterable, Mapping

from schemas.stats import DashboardStats, ProductReport, ProductStats, SalesReport


def _money(x: float) -> float:
    return round(float(x), 2)


def _cost(sale: Mapping[str, Any]) -> float:
    cost = sale.get("cost")
    return float(cost) if cost is not None else 0.0


def compute_stats(
    inventory: Iterable[Mapping[str, Any]],
    sales: Iterable[Mapping[str, Any]],
) -> DashboardStats:
    by_product: Dict[str, ProductStats] = {}
    total_sold = 0
    total_revenue = 0.0
    total_in_stock = 0

    for sale in sales:
        total_sold += 1
        total_revenue += float(sale["price"])
        stat = by_product.setdefault(sale["name"], ProductStats())
        stat.sold += 1
        stat.revenue += float(sale["price"])

    for item in inventory:
        quantity = int(item.get("quantity") or 0)
        total_in_stock += quantity
        stat = by_product.setdefault(item["name"], ProductStats())
        stat.in_stock += quantity

    for stat in by_product.values():
        stat.revenue = _money(stat.revenue)

    return DashboardStats(
        total_items=total_in_stock + total_sold,
        total_sold=total_sold,
        total_revenue=_money(total_revenue),
        total_in_stock=total_in_stock,
        by_product=by_product,
    )


def compute_sales_report(sales: Iterable[Mapping[str, Any]]) -> SalesReport:
    by_product: Dict[str, ProductReport] = {}
    total_sold = 0
    total_revenue = 0.0
    total_cost = 0.0

    for sale in sales:
        price = float(sale["price"])
        cost = _cost(sale)
        total_sold += 1
        total_revenue += price
        total_cost += cost
        entry = by_product.setdefault(sale["name"], ProductReport())
        entry.quantity += 1
        entry.revenue += price
        entry.cost += cost

    for entry in by_product.values():
        entry.revenue = _money(entry.revenue)
        entry.cost = _money(entry.cost)

    return SalesReport(
        total_sold=total_sold,
        total_revenue=_money(total_revenue),
        total_cost=_money(total_cost),
        total_profit=_money(total_revenue - total_cost),
        by_product=by_product,
    )
