# backend/tests/factories/catalog.py

from datetime import date

from factory import Faker, LazyFunction, Sequence

from modules.catalog.models.catalog_models import Customer, Order, OrderStatus, Product

from .base import BaseFactory


class CustomerFactory(BaseFactory):
    """Factory for creating customers."""

    class Meta:
        model = Customer

    name = Sequence(lambda n: f"Customer {n}")
    email = Faker("email")
    phone = Faker("phone_number")


class ProductFactory(BaseFactory):
    """Factory for creating products."""

    class Meta:
        model = Product

    name = Sequence(lambda n: f"Product {n}")
    category = "Beverages"
    price = 100.0
    stock = 50
    min_stock_level = 10
    max_stock_level = 100
    vendor = "Default Vendor"


class OrderFactory(BaseFactory):
    """Factory for creating orders; dated today unless told otherwise."""

    class Meta:
        model = Order

    customer = "Customer 0"
    product = "Product 0"
    amount = 100.0
    status = OrderStatus.COMPLETED.value
    date = LazyFunction(date.today)
    vendor = "Default Vendor"
    customer_type = "Restaurant"
    category = "Food & Beverage"
