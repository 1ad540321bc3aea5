"""
Products API Endpoints
Storefront catalog browsing and back-office product management
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional

from storefront.core.auth import TokenUser, require_admin
from storefront.core.exceptions import StorefrontError
from storefront.domain.product import ProductCreate, ProductUpdate
from storefront.services.catalog_service import CatalogService

router = APIRouter()


@router.get("/")
async def get_products(
    category: Optional[str] = Query(None, description="Filter by category slug"),
    search: Optional[str] = Query(None, description="Search by name or description"),
    min_price: Optional[float] = Query(None, ge=0, description="Minimum price"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum price"),
    in_stock: Optional[bool] = Query(None, description="Only products in stock (true) or out of stock (false)"),
    sort: str = Query('newest', description="newest, price_asc, price_desc or name"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0)
):
    """
    Get products with optional filters

    Returns products with stock flags included
    """
    try:
        service = CatalogService()
        products, total = service.list_products(
            category=category,
            search=search,
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
            sort=sort,
            limit=limit,
            offset=offset
        )

        return {
            "status": "success",
            "total": total,
            "limit": limit,
            "offset": offset,
            "count": len(products),
            "data": [product.to_dict() for product in products]
        }

    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.get("/catalog")
async def get_catalog():
    """Products grouped by category for the storefront home page"""
    try:
        sections = CatalogService().get_catalog_sections()
        return {
            "status": "success",
            "count": len(sections),
            "data": sections
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching catalog: {str(e)}")


@router.get("/{product_id}")
async def get_product(product_id: int):
    """Get a single product"""
    try:
        product = CatalogService().get_product(product_id)
        return {
            "status": "success",
            "data": product.to_dict()
        }

    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching product: {str(e)}")


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_product(
    data: ProductCreate,
    user: TokenUser = Depends(require_admin)
):
    """Create a product (admin only)"""
    try:
        product = CatalogService().create_product(data)
        return {
            "status": "success",
            "data": product.to_dict()
        }

    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create product: {str(e)}")


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    data: ProductUpdate,
    user: TokenUser = Depends(require_admin)
):
    """Update a product (admin only)"""
    try:
        product = CatalogService().update_product(product_id, data)
        return {
            "status": "success",
            "data": product.to_dict()
        }

    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update product: {str(e)}")


@router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    user: TokenUser = Depends(require_admin)
):
    """Delete a product (admin only)"""
    try:
        CatalogService().delete_product(product_id)
        return {
            "status": "success",
            "data": {"message": "Deleted successfully"}
        }

    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete product: {str(e)}")
