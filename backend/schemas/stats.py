from typing import Dict

from .inventory import CamelModel


class ProductStats(CamelModel):
    sold: int = 0
    in_stock: int = 0
    revenue: float = 0.0


class DashboardStats(CamelModel):
    total_items: int
    total_sold: int
    total_revenue: float
    total_in_stock: int
    by_product: Dict[str, ProductStats]


class ProductReport(CamelModel):
    quantity: int = 0
    revenue: float = 0.0
    cost: float = 0.0


class SalesReport(CamelModel):
    total_sold: int
    total_revenue: float
    total_cost: float
    total_profit: float
    by_product: Dict[str, ProductReport]
