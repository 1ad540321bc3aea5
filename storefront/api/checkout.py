"""
Checkout API Endpoints
Server-side cart pricing and cash-on-delivery order placement
"""
from fastapi import APIRouter, Depends, HTTPException, status

from storefront.core.exceptions import CheckoutError, StorefrontError
from storefront.core.rate_limit import limit_per_minute
from storefront.domain.cart import Cart, CheckoutRequest
from storefront.services.checkout_service import CheckoutService

router = APIRouter()


@router.post("/quote")
async def quote_cart(cart: Cart):
    """Price a cart from current catalog prices and report any problems"""
    try:
        quote = CheckoutService().quote(cart)
        return {
            "status": "success",
            "data": quote.to_dict()
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error pricing cart: {str(e)}")


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=[Depends(limit_per_minute(10))])
async def place_order(request: CheckoutRequest):
    """Place an order for the cart"""
    try:
        order = CheckoutService().place_order(request)
        return {
            "status": "success",
            "data": order.to_dict()
        }

    except CheckoutError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={"message": e.message, "issues": e.issues}
        )
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to place order: {str(e)}")
