# backend/modules/catalog/routers/catalog_router.py

import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from core.exceptions import APIError

from ..schemas.catalog_schemas import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    OrderCreate,
    OrderResponse,
    OrderUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from ..services.catalog_service import CatalogService
from ..services.store import DashboardStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Catalog"])


def get_catalog_service(store: DashboardStore = Depends(get_store)) -> CatalogService:
    return CatalogService(store)


def parse_limit(
    limit: Optional[str] = Query(None, description="Maximum rows, newest first"),
) -> Optional[int]:
    """
    Leading integer of the ``limit`` query value.

    Missing, non-numeric and non-positive values yield None, which lets the
    service fall back to its default page size.
    """
    match = re.match(r"\s*([+-]?\d+)", limit or "")
    if match is None:
        return None
    value = int(match.group(1))
    return value if value > 0 else None


def _server_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"Error {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )


# Orders


@router.get("/orders", response_model=List[OrderResponse])
def list_orders(
    limit: Optional[int] = Depends(parse_limit),
    service: CatalogService = Depends(get_catalog_service),
):
    """List the most recently created orders."""
    try:
        return service.list_orders(limit)
    except Exception as e:
        raise _server_error("list orders", e)


@router.post("/orders", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate, service: CatalogService = Depends(get_catalog_service)
):
    """Record a new order. Missing vendor/customer type/category fall back to defaults."""
    try:
        return service.create_order(payload)
    except APIError:
        raise
    except Exception as e:
        raise _server_error("create order", e)


@router.put("/orders/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: str,
    payload: OrderUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    try:
        return service.update_order(order_id, payload)
    except APIError:
        raise
    except Exception as e:
        raise _server_error("update order", e)


@router.delete("/orders/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: str, service: CatalogService = Depends(get_catalog_service)):
    try:
        service.delete_order(order_id)
    except Exception as e:
        raise _server_error("delete order", e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Products


@router.get("/products", response_model=List[ProductResponse])
def list_products(
    limit: Optional[int] = Depends(parse_limit),
    service: CatalogService = Depends(get_catalog_service),
):
    """List products with the number of orders placed for each."""
    try:
        return service.list_products(limit)
    except Exception as e:
        raise _server_error("list products", e)


@router.post(
    "/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED
)
def create_product(
    payload: ProductCreate, service: CatalogService = Depends(get_catalog_service)
):
    try:
        return service.create_product(payload)
    except APIError:
        raise
    except Exception as e:
        raise _server_error("create product", e)


@router.put("/products/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    try:
        return service.update_product(product_id, payload)
    except APIError:
        raise
    except Exception as e:
        raise _server_error("update product", e)


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: str, service: CatalogService = Depends(get_catalog_service)
):
    try:
        service.delete_product(product_id)
    except Exception as e:
        raise _server_error("delete product", e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Customers


@router.get("/customers", response_model=List[CustomerResponse])
def list_customers(
    limit: Optional[int] = Depends(parse_limit),
    service: CatalogService = Depends(get_catalog_service),
):
    """List customers with order count and total spend joined by name."""
    try:
        return service.list_customers(limit)
    except Exception as e:
        raise _server_error("list customers", e)


@router.post(
    "/customers", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED
)
def create_customer(
    payload: CustomerCreate, service: CatalogService = Depends(get_catalog_service)
):
    try:
        return service.create_customer(payload)
    except APIError:
        raise
    except Exception as e:
        raise _server_error("create customer", e)


@router.put("/customers/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    try:
        return service.update_customer(customer_id, payload)
    except APIError:
        raise
    except Exception as e:
        raise _server_error("update customer", e)


@router.delete("/customers/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: str, service: CatalogService = Depends(get_catalog_service)
):
    try:
        service.delete_customer(customer_id)
    except Exception as e:
        raise _server_error("delete customer", e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
