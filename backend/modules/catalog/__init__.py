# backend/modules/catalog/__init__.py

"""
Catalog Module - Customers, Products and Orders

Owns the three persistent entities the dashboard reports on and the
store accessor every analytics service reads through.

Key Components:
- Models: SQLAlchemy tables for customers, products and orders
- Schemas: Pydantic request/response models for the CRUD endpoints
- Services: DashboardStore (row access) and CatalogService (CRUD + derived totals)
- Routers: /api/orders, /api/products, /api/customers

Orders reference customers and products by name. Order rows keep the
name as it was when the order was written; renames and deletes in the
catalog do not touch existing orders.
"""

__version__ = "1.0.0"
