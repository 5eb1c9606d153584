# backend/modules/catalog/schemas/catalog_schemas.py

import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt


# Order schemas
class OrderBase(BaseModel):
    customer: str = Field(..., min_length=1, max_length=255)
    product: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., strict=True, description="Order value in major currency units")
    status: str = Field(..., min_length=1, max_length=20)
    vendor: Optional[str] = None
    customer_type: Optional[str] = None
    category: Optional[str] = None


class OrderCreate(OrderBase):
    """Schema for creating an order; ``date`` defaults to today"""

    date: Optional[datetime.date] = None


class OrderUpdate(BaseModel):
    """Partial update: omitted fields keep their stored value"""

    customer: Optional[str] = Field(None, min_length=1, max_length=255)
    product: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[float] = Field(None, strict=True)
    status: Optional[str] = Field(None, min_length=1, max_length=20)
    date: Optional[datetime.date] = None
    vendor: Optional[str] = None
    customer_type: Optional[str] = None
    category: Optional[str] = None


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer: str
    product: str
    amount: float
    status: str
    date: datetime.date
    vendor: Optional[str] = None
    customer_type: Optional[str] = None
    category: Optional[str] = None


# Product schemas
# Any JSON number; booleans and numeric strings are rejected
StockLevel = Union[StrictInt, StrictFloat]


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., strict=True)
    stock: StockLevel
    min_stock_level: Optional[int] = None
    max_stock_level: Optional[int] = None
    vendor: Optional[str] = None


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[float] = Field(None, strict=True)
    stock: Optional[StockLevel] = None
    min_stock_level: Optional[int] = None
    max_stock_level: Optional[int] = None
    vendor: Optional[str] = None


class ProductResponse(BaseModel):
    """Product row plus the number of orders placed for it"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    price: float
    stock: Union[int, float]
    min_stock_level: Optional[int] = None
    max_stock_level: Optional[int] = None
    vendor: Optional[str] = None
    sold: int = 0


# Customer schemas
class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, min_length=1, max_length=50)


class CustomerResponse(BaseModel):
    """Customer row with order totals joined by name"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    phone: str
    total_orders: int = Field(0, serialization_alias="totalOrders")
    total_spent: int = Field(0, serialization_alias="totalSpent")
