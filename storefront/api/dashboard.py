"""
Dashboard API Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.core.auth import TokenUser, require_admin
from storefront.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/")
async def get_dashboard(user: TokenUser = Depends(require_admin)):
    """Revenue, order and inventory summary for the back office"""
    try:
        return {
            "status": "success",
            "data": DashboardService().get_dashboard()
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error building dashboard: {str(e)}")
