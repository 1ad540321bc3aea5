"""
Category Repository - Data Access Layer for Categories
"""
from typing import List, Optional

from psycopg2 import errors

from storefront.domain.catalog import Category, CategoryCreate, CategoryUpdate
from storefront.core.database import get_db_connection_dict
from storefront.core.exceptions import ConflictError


class CategoryRepository:
    """Categories are keyed by slug"""

    @staticmethod
    def _map_row_to_category(row: dict) -> Category:
        return Category(
            id=row['id'],
            name=row['name'],
            description=row.get('description'),
            image=row.get('image'),
            product_count=row.get('product_count') or 0,
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at')
        )

    def find_all(self) -> List[Category]:
        """All categories with the number of products in each"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    c.id, c.name, c.description, c.image,
                    c.created_at, c.updated_at,
                    COUNT(p.id) as product_count
                FROM categories c
                LEFT JOIN products p ON p.category = c.id
                GROUP BY c.id
                ORDER BY c.name
            """)

            return [self._map_row_to_category(row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def find_by_id(self, category_id: str) -> Optional[Category]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT id, name, description, image, created_at, updated_at
                FROM categories
                WHERE id = %s
            """, (category_id,))

            row = cursor.fetchone()
            return self._map_row_to_category(row) if row else None

        finally:
            cursor.close()
            conn.close()

    def create(self, category_id: str, data: CategoryCreate) -> Category:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                INSERT INTO categories (id, name, description, image, created_at, updated_at)
                VALUES (%s, %s, %s, %s, NOW(), NOW())
                RETURNING id, name, description, image, created_at, updated_at
            """, (category_id, data.name, data.description, data.image))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_category(row)

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def update(self, category_id: str, data: CategoryUpdate) -> Optional[Category]:
        """Update the fields present in `data`; the slug never changes"""
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return self.find_by_id(category_id)

        update_fields = [f"{field} = %s" for field in changes]
        values = list(changes.values())
        update_fields.append("updated_at = NOW()")
        values.append(category_id)

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE categories
                SET {', '.join(update_fields)}
                WHERE id = %s
                RETURNING id, name, description, image, created_at, updated_at
            """, values)

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_category(row) if row else None

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def delete(self, category_id: str) -> bool:
        """
        Delete a category by slug

        Raises:
            ConflictError: products still belong to the category
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM categories WHERE id = %s RETURNING id", (category_id,))
            deleted = cursor.fetchone() is not None
            conn.commit()
            return deleted

        except errors.ForeignKeyViolation:
            conn.rollback()
            raise ConflictError(f"Category {category_id} still has products")
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
