# backend/tests/factories/__init__.py

"""
Shared test factories for the dashboard backend.
"""

from .base import BaseFactory, TestSession
from .catalog import CustomerFactory, OrderFactory, ProductFactory

__all__ = [
    "BaseFactory",
    "TestSession",
    "CustomerFactory",
    "ProductFactory",
    "OrderFactory",
]
