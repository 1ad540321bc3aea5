"""
Domain exceptions raised by services and translated to HTTP errors by the API layer
"""
from typing import List, Optional


class StorefrontError(Exception):
    """Base class for storefront errors"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StorefrontError):
    status_code = 404


class ConflictError(StorefrontError):
    status_code = 409


class InsufficientStockError(ConflictError):
    """Raised when a product does not have enough stock for an order line"""

    def __init__(self, message: str, product_id: Optional[int] = None):
        super().__init__(message)
        self.product_id = product_id


class CheckoutError(StorefrontError):
    """Raised when a cart cannot be turned into an order"""

    status_code = 400

    def __init__(self, message: str, issues: Optional[List[str]] = None):
        super().__init__(message)
        self.issues = issues or []


class UploadError(StorefrontError):
    """Raised when the image host rejects an upload"""

    status_code = 502


class InvalidRequestError(StorefrontError):
    """Raised when a request refers to something that cannot be used"""

    status_code = 400
