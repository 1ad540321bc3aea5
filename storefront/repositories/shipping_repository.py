"""
Shipping Method Repository - Data Access Layer for delivery options
"""
from typing import List, Optional

from storefront.domain.catalog import ShippingMethod, ShippingMethodCreate, ShippingMethodUpdate
from storefront.core.database import get_db_connection_dict


SHIPPING_COLUMNS = "id, name, cost, estimated_time, status, created_at, updated_at"


class ShippingMethodRepository:

    def find_all(self, status: Optional[str] = None) -> List[ShippingMethod]:
        """Shipping methods, cheapest first"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            if status:
                cursor.execute(f"""
                    SELECT {SHIPPING_COLUMNS}
                    FROM shipping_methods
                    WHERE status = %s
                    ORDER BY cost ASC, id ASC
                """, (status,))
            else:
                cursor.execute(f"""
                    SELECT {SHIPPING_COLUMNS}
                    FROM shipping_methods
                    ORDER BY cost ASC, id ASC
                """)

            return [ShippingMethod(**row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def find_by_id(self, method_id: int) -> Optional[ShippingMethod]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {SHIPPING_COLUMNS}
                FROM shipping_methods
                WHERE id = %s
            """, (method_id,))

            row = cursor.fetchone()
            return ShippingMethod(**row) if row else None

        finally:
            cursor.close()
            conn.close()

    def create(self, data: ShippingMethodCreate) -> ShippingMethod:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO shipping_methods (name, cost, estimated_time, status, created_at, updated_at)
                VALUES (%s, %s, %s, %s, NOW(), NOW())
                RETURNING {SHIPPING_COLUMNS}
            """, (data.name, data.cost, data.estimated_time, data.status))

            row = cursor.fetchone()
            conn.commit()
            return ShippingMethod(**row)

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def update(self, method_id: int, data: ShippingMethodUpdate) -> Optional[ShippingMethod]:
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return self.find_by_id(method_id)

        update_fields = [f"{field} = %s" for field in changes]
        values = list(changes.values())
        update_fields.append("updated_at = NOW()")
        values.append(method_id)

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE shipping_methods
                SET {', '.join(update_fields)}
                WHERE id = %s
                RETURNING {SHIPPING_COLUMNS}
            """, values)

            row = cursor.fetchone()
            conn.commit()
            return ShippingMethod(**row) if row else None

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def delete(self, method_id: int) -> bool:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM shipping_methods WHERE id = %s RETURNING id", (method_id,))
            deleted = cursor.fetchone() is not None
            conn.commit()
            return deleted

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
