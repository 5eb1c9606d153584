# backend/modules/catalog/models/__init__.py

from .catalog_models import Customer, Product, Order, OrderStatus

__all__ = ["Customer", "Product", "Order", "OrderStatus"]
