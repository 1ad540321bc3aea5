"""
Orders API Endpoints
Back-office order management; every stock movement goes through OrderService
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional

from storefront.core.auth import TokenUser, require_admin
from storefront.core.exceptions import StorefrontError
from storefront.domain.order import OrderCreate, OrderUpdate
from storefront.services.invoice_service import build_invoice
from storefront.services.order_service import OrderService

router = APIRouter()


@router.get("/")
async def get_orders(
    status_filter: Optional[str] = Query(None, alias="status",
                                         pattern="^(pending|processing|shipped|delivered|cancelled)$",
                                         description="Filter by order status"),
    search: Optional[str] = Query(None, description="Search by order number, customer, phone or address"),
    from_date: Optional[str] = Query(None, description="From date (YYYY-MM-DD)"),
    to_date: Optional[str] = Query(None, description="To date (YYYY-MM-DD)"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user: TokenUser = Depends(require_admin)
):
    """
    Get orders, newest first

    Query params:
    - status: pending, processing, shipped, delivered, cancelled
    - search: free text over order number, customer name, phone, address
    - from_date / to_date: order date range
    """
    try:
        orders, total = OrderService().get_orders(
            status=status_filter,
            search=search,
            from_date=from_date,
            to_date=to_date,
            limit=limit,
            offset=offset
        )

        return {
            "status": "success",
            "total": total,
            "limit": limit,
            "offset": offset,
            "count": len(orders),
            "data": [order.to_dict() for order in orders]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching orders: {str(e)}")


@router.get("/{order_id}")
async def get_order(order_id: int, user: TokenUser = Depends(require_admin)):
    """Get a single order with its line items"""
    try:
        order = OrderService().get_order(order_id)
        if not order:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")

        return {
            "status": "success",
            "data": order.to_dict()
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching order: {str(e)}")


@router.get("/{order_id}/invoice")
async def get_order_invoice(order_id: int, user: TokenUser = Depends(require_admin)):
    """Printable invoice data for an order"""
    try:
        order = OrderService().get_order(order_id)
        if not order:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")

        return {
            "status": "success",
            "data": build_invoice(order)
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error building invoice: {str(e)}")


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_order(data: OrderCreate, user: TokenUser = Depends(require_admin)):
    """
    Create an order

    Stock is taken for every item; returns 409 if any product runs short
    """
    try:
        order = OrderService().create_order(data)
        return {
            "status": "success",
            "data": order.to_dict()
        }

    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create order: {str(e)}")


@router.patch("/{order_id}")
async def update_order(
    order_id: int,
    data: OrderUpdate,
    user: TokenUser = Depends(require_admin)
):
    """
    Update an order

    Cancelling returns its stock; reopening a cancelled order takes it again
    """
    try:
        order = OrderService().update_order(order_id, data)
        if not order:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")

        return {
            "status": "success",
            "data": order.to_dict()
        }

    except HTTPException:
        raise
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update order: {str(e)}")


@router.delete("/{order_id}")
async def delete_order(order_id: int, user: TokenUser = Depends(require_admin)):
    """Delete an order, returning its stock unless it was cancelled"""
    try:
        order = OrderService().delete_order(order_id)
        if not order:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")

        return {
            "status": "success",
            "data": {"message": "Deleted successfully"}
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete order: {str(e)}")
