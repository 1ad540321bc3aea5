"""
Shipping Methods API Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional

from storefront.core.auth import TokenUser, require_admin
from storefront.domain.catalog import ShippingMethodCreate, ShippingMethodUpdate
from storefront.repositories.shipping_repository import ShippingMethodRepository

router = APIRouter()


@router.get("/")
async def get_shipping_methods(
    status_filter: Optional[str] = Query(None, alias="status", pattern="^(active|inactive)$",
                                         description="Filter by status (active, inactive)")
):
    """List shipping methods, cheapest first"""
    try:
        methods = ShippingMethodRepository().find_all(status=status_filter)
        return {
            "status": "success",
            "count": len(methods),
            "data": [method.to_dict() for method in methods]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch shipping methods: {str(e)}")


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_shipping_method(
    data: ShippingMethodCreate,
    user: TokenUser = Depends(require_admin)
):
    """Create a shipping method (admin only)"""
    try:
        method = ShippingMethodRepository().create(data)
        return {
            "status": "success",
            "data": method.to_dict()
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create shipping method: {str(e)}")


@router.put("/{method_id}")
async def update_shipping_method(
    method_id: int,
    data: ShippingMethodUpdate,
    user: TokenUser = Depends(require_admin)
):
    """Update a shipping method (admin only)"""
    try:
        method = ShippingMethodRepository().update(method_id, data)
        if not method:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shipping method not found")

        return {
            "status": "success",
            "data": method.to_dict()
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update shipping method: {str(e)}")


@router.delete("/{method_id}")
async def delete_shipping_method(
    method_id: int,
    user: TokenUser = Depends(require_admin)
):
    """Delete a shipping method (admin only)"""
    try:
        if not ShippingMethodRepository().delete(method_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shipping method not found")

        return {
            "status": "success",
            "data": {"message": "Deleted successfully"}
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete shipping method: {str(e)}")
