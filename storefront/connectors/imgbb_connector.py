"""
ImgBB Connector
Uploads product and category images to the ImgBB image host
"""
import base64
import logging
from typing import Optional

import httpx

from storefront.core.config import settings
from storefront.core.exceptions import UploadError


logger = logging.getLogger(__name__)


class ImgBBConnector:
    """
    Connector for the ImgBB upload API

    The image is sent base64-encoded in the `image` form field and the
    direct image URL is returned.
    """

    def __init__(self, api_key: Optional[str] = None, upload_url: Optional[str] = None):
        """
        Initialize ImgBB connector

        Args:
            api_key: ImgBB API key (defaults to IMGBB_API_KEY)
            upload_url: Upload endpoint (defaults to IMGBB_UPLOAD_URL)
        """
        self.api_key = api_key or settings.IMGBB_API_KEY
        self.upload_url = upload_url or settings.IMGBB_UPLOAD_URL

        if not self.api_key:
            raise ValueError("IMGBB_API_KEY missing")

    async def upload_image(self, content: bytes, filename: Optional[str] = None) -> str:
        """
        Upload raw image bytes

        Returns:
            Direct URL of the uploaded image

        Raises:
            UploadError: ImgBB answered with success = false
            httpx.HTTPError: the request itself failed
        """
        form = {'image': base64.b64encode(content).decode('ascii')}
        if filename:
            form['name'] = filename.rsplit('.', 1)[0]

        async with httpx.AsyncClient() as client:
            response = await client.post(
                self.upload_url,
                params={'key': self.api_key},
                data=form,
                timeout=30.0
            )

        data = response.json()

        if not data.get('success'):
            message = (data.get('error') or {}).get('message') or 'Unknown error'
            logger.error(f"ImgBB upload error: {data}")
            raise UploadError(f"ImgBB Upload Failed: {message}")

        return data['data']['url']
