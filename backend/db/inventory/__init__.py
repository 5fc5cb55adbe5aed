"""
Inventory store tables.

Models:
- InventoryItem (one row per product, keyed by the id printed on its QR label)
"""
