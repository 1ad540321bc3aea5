"""
Catalog Service
Product management and storefront catalog views
"""
import logging
from typing import Dict, List, Optional, Tuple

from storefront.core.exceptions import InvalidRequestError, NotFoundError
from storefront.domain.product import Product, ProductCreate, ProductUpdate
from storefront.repositories.category_repository import CategoryRepository
from storefront.repositories.product_repository import ProductRepository, SORT_OPTIONS


logger = logging.getLogger(__name__)


class CatalogService:
    """Service for product catalog business logic"""

    def __init__(self, product_repo: ProductRepository = None, category_repo: CategoryRepository = None):
        self.product_repo = product_repo or ProductRepository()
        self.category_repo = category_repo or CategoryRepository()

    def list_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        in_stock: Optional[bool] = None,
        sort: str = 'newest',
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Product], int]:
        if sort not in SORT_OPTIONS:
            raise InvalidRequestError(f"sort must be one of: {', '.join(SORT_OPTIONS)}")

        if min_price is not None and max_price is not None and min_price > max_price:
            raise InvalidRequestError("min_price cannot be greater than max_price")

        return self.product_repo.find_all(
            category=category,
            search=search,
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
            sort=sort,
            limit=limit,
            offset=offset
        )

    def get_product(self, product_id: int) -> Product:
        product = self.product_repo.find_by_id(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def create_product(self, data: ProductCreate) -> Product:
        self._ensure_category_exists(data.category)
        product = self.product_repo.create(data)
        logger.info(f"Created product {product.id} ({product.name})")
        return product

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        if data.category is not None:
            self._ensure_category_exists(data.category)

        product = self.product_repo.update(product_id, data)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def delete_product(self, product_id: int):
        if not self.product_repo.delete(product_id):
            raise NotFoundError(f"Product {product_id} not found")
        logger.info(f"Deleted product {product_id}")

    def get_catalog_sections(self) -> List[Dict]:
        """
        Products grouped under their category, in category order

        Categories without products are left out; products whose category
        no longer exists are not shown.
        """
        categories = self.category_repo.find_all()
        products = self.product_repo.list_all()

        by_category: Dict[str, List[Product]] = {}
        for product in products:
            by_category.setdefault(product.category, []).append(product)

        return [
            {
                'category': category.to_dict(),
                'products': [product.to_dict() for product in by_category[category.id]]
            }
            for category in categories
            if by_category.get(category.id)
        ]

    def _ensure_category_exists(self, category_id: str):
        if not self.category_repo.find_by_id(category_id):
            raise InvalidRequestError(f"Category '{category_id}' does not exist")
