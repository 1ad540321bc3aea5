"""
Upload API Endpoints
Images go to ImgBB; only the hosted URL is stored on products and categories
"""
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from typing import Optional

from storefront.connectors.imgbb_connector import ImgBBConnector
from storefront.core.auth import TokenUser, require_admin
from storefront.core.exceptions import UploadError

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/")
async def upload_image(
    file: Optional[UploadFile] = File(None),
    user: TokenUser = Depends(require_admin)
):
    """Upload an image file and return its public URL (admin only)"""
    if file is None:
        raise HTTPException(status_code=400, detail="No file found")

    try:
        connector = ImgBBConnector()
    except ValueError:
        logger.error("IMGBB_API_KEY is not set")
        raise HTTPException(status_code=500, detail="Server configuration error: IMGBB_API_KEY missing")

    try:
        content = await file.read()
        url = await connector.upload_image(content, filename=file.filename)
        return {
            "status": "success",
            "data": {"url": url}
        }

    except UploadError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Upload failed: {e}")
        raise HTTPException(status_code=500, detail="Internal server error during upload")
