"""
Customers API Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.core.auth import TokenUser, require_admin
from storefront.services.customer_service import CustomerService

router = APIRouter()


@router.get("/")
async def get_customers(user: TokenUser = Depends(require_admin)):
    """Customers derived from orders, biggest spenders first"""
    try:
        customers = CustomerService().get_customers()
        return {
            "status": "success",
            "count": len(customers),
            "data": customers
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching customers: {str(e)}")
