"""
Inquiries API Endpoints
Contact form submissions (public) and the back-office inbox (admin)
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional

from storefront.core.auth import TokenUser, require_admin
from storefront.core.rate_limit import limit_per_minute
from storefront.domain.inquiry import InquiryCreate, InquiryStatusUpdate
from storefront.repositories.inquiry_repository import InquiryRepository

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=[Depends(limit_per_minute(5))])
async def submit_inquiry(data: InquiryCreate):
    """Submit a contact form message"""
    try:
        inquiry = InquiryRepository().create(data)
        return {
            "status": "success",
            "data": inquiry.to_dict()
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to submit inquiry: {str(e)}")


@router.get("/")
async def get_inquiries(
    status_filter: Optional[str] = Query(None, alias="status", pattern="^(new|read|replied)$",
                                         description="Filter by status (new, read, replied)"),
    user: TokenUser = Depends(require_admin)
):
    """List inquiries, newest first (admin only)"""
    try:
        inquiries = InquiryRepository().find_all(status=status_filter)
        return {
            "status": "success",
            "count": len(inquiries),
            "data": [inquiry.to_dict() for inquiry in inquiries]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch inquiries: {str(e)}")


@router.patch("/{inquiry_id}")
async def update_inquiry_status(
    inquiry_id: int,
    data: InquiryStatusUpdate,
    user: TokenUser = Depends(require_admin)
):
    """Mark an inquiry as new, read or replied (admin only)"""
    try:
        inquiry = InquiryRepository().update_status(inquiry_id, data.status)
        if not inquiry:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inquiry not found")

        return {
            "status": "success",
            "data": inquiry.to_dict()
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update inquiry: {str(e)}")


@router.delete("/{inquiry_id}")
async def delete_inquiry(
    inquiry_id: int,
    user: TokenUser = Depends(require_admin)
):
    """Delete an inquiry (admin only)"""
    try:
        if not InquiryRepository().delete(inquiry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inquiry not found")

        return {
            "status": "success",
            "data": {"message": "Deleted successfully"}
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete inquiry: {str(e)}")
