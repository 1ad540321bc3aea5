"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and returns Order domain models.
Line items live in the orders.items JSONB column.
"""
from typing import List, Optional, Tuple, Dict, Any
from psycopg2.extras import Json

from storefront.domain.order import Order, OrderItem
from storefront.core.database import get_db_connection_dict


ORDER_COLUMNS = """
    id, order_number, customer_name, phone, email, address, city,
    items, shipping_method_id, shipping_method_name, shipping_cost,
    subtotal, total, payment_method, status, notes,
    order_date, created_at, updated_at
"""

# Columns staff may change through update()
UPDATABLE_COLUMNS = {
    'status', 'customer_name', 'phone', 'email', 'address', 'city',
    'shipping_cost', 'total', 'notes',
}


class OrderRepository:
    """
    Repository for Order data access

    Methods that take a `conn` argument run on the caller's connection
    and leave commit/rollback to the caller.
    """

    @staticmethod
    def _map_row_to_order(row: dict) -> Order:
        order_dict = dict(row)
        order_dict['items'] = [OrderItem(**item) for item in (row.get('items') or [])]
        return Order(**order_dict)

    def find_by_id(self, order_id: int, conn=None, for_update: bool = False) -> Optional[Order]:
        """
        Find order by ID

        Args:
            order_id: Internal order ID
            conn: Existing connection to run on (optional)
            for_update: Lock the row until the caller's transaction ends

        Returns:
            Order or None if not found
        """
        should_close = conn is None
        if conn is None:
            conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            lock_clause = "FOR UPDATE" if for_update else ""
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders
                WHERE id = %s
                {lock_clause}
            """, (order_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_order(row)

        finally:
            cursor.close()
            if should_close:
                conn.close()

    def find_all(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> Tuple[List[Order], int]:
        """
        Find orders with filters, newest first

        Args:
            status: Filter by order status
            search: Search by order number, customer name, phone, or address
            from_date: Filter orders from this date
            to_date: Filter orders until this date
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of orders, total count)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = []
            params = []

            if status:
                conditions.append("status = %s")
                params.append(status)

            if from_date:
                conditions.append("order_date >= %s")
                params.append(from_date)

            if to_date:
                conditions.append("order_date <= %s")
                params.append(to_date)

            if search:
                conditions.append("""(
                    order_number ILIKE %s OR
                    customer_name ILIKE %s OR
                    phone ILIKE %s OR
                    address ILIKE %s
                )""")
                search_param = f"%{search}%"
                params.extend([search_param] * 4)

            where_clause = " AND ".join(conditions) if conditions else "1=1"

            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM orders
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders
                WHERE {where_clause}
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s
            """, params + [limit, offset])

            orders = [self._map_row_to_order(row) for row in cursor.fetchall()]
            return orders, total

        finally:
            cursor.close()
            conn.close()

    def list_all(self) -> List[Order]:
        """Every order, newest first (dashboard and customer aggregation)"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders
                ORDER BY order_date DESC, id DESC
            """)
            return [self._map_row_to_order(row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def insert(self, values: Dict[str, Any], conn) -> Order:
        """
        Insert an order row built by the order service

        Args:
            values: Column values; `items` is a list of OrderItem
            conn: Caller's connection (caller commits)
        """
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO orders (
                    order_number, customer_name, phone, email, address, city,
                    items, shipping_method_id, shipping_method_name, shipping_cost,
                    subtotal, total, payment_method, status, notes,
                    order_date, created_at, updated_at
                ) VALUES (
                    %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, NOW(), NOW()
                )
                RETURNING {ORDER_COLUMNS}
            """, (
                values['order_number'],
                values['customer_name'],
                values['phone'],
                values.get('email'),
                values['address'],
                values.get('city'),
                Json([item.to_document() for item in values['items']]),
                values.get('shipping_method_id'),
                values.get('shipping_method_name'),
                values['shipping_cost'],
                values['subtotal'],
                values['total'],
                values['payment_method'],
                values['status'],
                values.get('notes'),
                values['order_date']
            ))

            return self._map_row_to_order(cursor.fetchone())

        finally:
            cursor.close()

    def update(self, order_id: int, changes: Dict[str, Any], conn) -> Optional[Order]:
        """
        Update order columns

        Args:
            order_id: Order to update
            changes: Column -> value, limited to UPDATABLE_COLUMNS
            conn: Caller's connection (caller commits)
        """
        unknown = set(changes) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update order columns: {sorted(unknown)}")

        if not changes:
            return self.find_by_id(order_id, conn=conn)

        update_fields = [f"{field} = %s" for field in changes]
        values = list(changes.values())
        update_fields.append("updated_at = NOW()")
        values.append(order_id)

        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE orders
                SET {', '.join(update_fields)}
                WHERE id = %s
                RETURNING {ORDER_COLUMNS}
            """, values)

            row = cursor.fetchone()
            return self._map_row_to_order(row) if row else None

        finally:
            cursor.close()

    def delete(self, order_id: int, conn) -> bool:
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM orders WHERE id = %s RETURNING id", (order_id,))
            return cursor.fetchone() is not None

        finally:
            cursor.close()
