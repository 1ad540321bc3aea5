"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.
"""
import logging
from typing import List, Optional, Tuple
from psycopg2.extras import Json

from storefront.domain.product import Product, ProductCreate, ProductUpdate
from storefront.core.database import get_db_connection_dict


logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = """
    id, name, description, highlights, price, stock, category,
    image, image_hint, gallery_images, size, size_guide,
    created_at, updated_at
"""

# Whitelisted ORDER BY clauses for catalog sorting
SORT_OPTIONS = {
    'newest': 'created_at DESC, id DESC',
    'price_asc': 'price ASC, id ASC',
    'price_desc': 'price DESC, id ASC',
    'name': 'name ASC, id ASC',
}


class ProductRepository:
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.

    Methods that take a `conn` argument run on the caller's connection
    and leave commit/rollback to the caller.
    """

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        """Map a products row to the Product domain model"""
        return Product(
            id=row['id'],
            name=row['name'],
            description=row['description'] or '',
            highlights=row.get('highlights'),
            price=row['price'],
            stock=row['stock'],
            category=row['category'],
            image=row.get('image'),
            image_hint=row.get('image_hint'),
            gallery_images=row.get('gallery_images') or [],
            size=row.get('size'),
            size_guide=row.get('size_guide'),
            created_at=row['created_at'],
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, product_id: int, conn=None, for_update: bool = False) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Internal product ID
            conn: Existing connection to run on (optional)
            for_update: Lock the row until the caller's transaction ends

        Returns:
            Product or None if not found
        """
        should_close = conn is None
        if conn is None:
            conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            lock_clause = "FOR UPDATE" if for_update else ""
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = %s
                {lock_clause}
            """, (product_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_product(row)

        finally:
            cursor.close()
            if should_close:
                conn.close()

    def find_by_ids(self, product_ids: List[int]) -> List[Product]:
        """Find several products at once (order of result is by id)"""
        if not product_ids:
            return []

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = ANY(%s)
                ORDER BY id
            """, (list(product_ids),))

            return [self._map_row_to_product(row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def find_all(
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
        """
        Find products with filters

        Args:
            category: Filter by category slug
            search: Search in name or description
            min_price: Minimum price (inclusive)
            max_price: Maximum price (inclusive)
            in_stock: True for stock > 0, False for stock <= 0
            sort: One of SORT_OPTIONS
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of products, total count)
        """
        if sort not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {sort}")

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = []
            params = []

            if category:
                conditions.append("category = %s")
                params.append(category)

            if search:
                conditions.append("(name ILIKE %s OR description ILIKE %s)")
                search_term = f"%{search}%"
                params.extend([search_term, search_term])

            if min_price is not None:
                conditions.append("price >= %s")
                params.append(min_price)

            if max_price is not None:
                conditions.append("price <= %s")
                params.append(max_price)

            if in_stock is True:
                conditions.append("stock > 0")
            elif in_stock is False:
                conditions.append("stock <= 0")

            where_clause = " AND ".join(conditions) if conditions else "1=1"

            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM products
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE {where_clause}
                ORDER BY {SORT_OPTIONS[sort]}
                LIMIT %s OFFSET %s
            """, params + [limit, offset])

            products = [self._map_row_to_product(row) for row in cursor.fetchall()]
            return products, total

        finally:
            cursor.close()
            conn.close()

    def list_all(self) -> List[Product]:
        """All products, ordered by category then name"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                ORDER BY category, name
            """)
            return [self._map_row_to_product(row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def create(self, data: ProductCreate) -> Product:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO products (
                    name, description, highlights, price, stock, category,
                    image, image_hint, gallery_images, size, size_guide,
                    created_at, updated_at
                ) VALUES (
                    %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, NOW(), NOW()
                )
                RETURNING {PRODUCT_COLUMNS}
            """, (
                data.name,
                data.description,
                data.highlights,
                data.price,
                data.stock,
                data.category,
                data.image,
                data.image_hint,
                Json(data.gallery_images),
                data.size,
                data.size_guide
            ))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_product(row)

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def update(self, product_id: int, data: ProductUpdate) -> Optional[Product]:
        """
        Update the fields present in `data`

        Returns:
            Updated product, or None if it does not exist
        """
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return self.find_by_id(product_id)

        update_fields = []
        values = []
        for field, value in changes.items():
            update_fields.append(f"{field} = %s")
            values.append(Json(value) if field == 'gallery_images' else value)

        update_fields.append("updated_at = NOW()")
        values.append(product_id)

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE products
                SET {', '.join(update_fields)}
                WHERE id = %s
                RETURNING {PRODUCT_COLUMNS}
            """, values)

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_product(row) if row else None

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def delete(self, product_id: int) -> bool:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM products WHERE id = %s RETURNING id", (product_id,))
            deleted = cursor.fetchone() is not None
            conn.commit()
            return deleted

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def adjust_stock(self, product_id: int, delta: int, conn) -> int:
        """
        Add `delta` (negative to decrement) to a product's stock

        Runs on the caller's connection; the caller commits.

        Returns:
            The new stock level
        """
        cursor = conn.cursor()

        try:
            cursor.execute("""
                UPDATE products
                SET stock = stock + %s, updated_at = NOW()
                WHERE id = %s
                RETURNING stock
            """, (delta, product_id))

            new_stock = cursor.fetchone()['stock']
            logger.info(f"Stock for product {product_id} adjusted by {delta:+d} -> {new_stock}")
            return new_stock

        finally:
            cursor.close()
