"""
Categories API Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status

from storefront.core.auth import TokenUser, require_admin
from storefront.core.exceptions import StorefrontError
from storefront.domain.catalog import CategoryCreate, CategoryUpdate, slugify
from storefront.repositories.category_repository import CategoryRepository

router = APIRouter()


@router.get("/")
async def get_categories():
    """List categories with their product counts"""
    try:
        categories = CategoryRepository().find_all()
        return {
            "status": "success",
            "count": len(categories),
            "data": [category.to_dict() for category in categories]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch categories: {str(e)}")


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    user: TokenUser = Depends(require_admin)
):
    """Create a category; its id is the slug of its name (admin only)"""
    repo = CategoryRepository()
    category_id = slugify(data.name)

    try:
        if repo.find_by_id(category_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Category slug already exists"
            )

        category = repo.create(category_id, data)
        return {
            "status": "success",
            "data": category.to_dict()
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create category: {str(e)}")


@router.put("/{category_id}")
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    user: TokenUser = Depends(require_admin)
):
    """Update a category by slug (admin only)"""
    try:
        category = CategoryRepository().update(category_id, data)
        if not category:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

        return {
            "status": "success",
            "data": category.to_dict()
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update category: {str(e)}")


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    user: TokenUser = Depends(require_admin)
):
    """Delete a category by slug (admin only)"""
    try:
        if not CategoryRepository().delete(category_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

        return {
            "status": "success",
            "data": {"message": "Deleted successfully"}
        }

    except HTTPException:
        raise
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete category: {str(e)}")
