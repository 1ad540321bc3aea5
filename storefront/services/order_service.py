"""
Order Service
Order lifecycle and the stock bookkeeping that goes with it

Stock rules:
- Creating an order takes each line's quantity out of stock, failing if a
  product does not have enough. An order created as cancelled takes nothing.
- Cancelling an order puts its quantities back.
- Moving an order out of cancelled takes the quantities out again, failing
  if the stock is no longer there.
- Deleting an order that is not cancelled puts its quantities back.

Lines whose product no longer exists in the catalog are skipped.
Each operation runs in one transaction with the product rows locked, so
a failure part-way through leaves stock untouched.
"""
import logging
import secrets
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from storefront.core.database import transaction
from storefront.core.exceptions import InsufficientStockError
from storefront.domain.order import Order, OrderItem, OrderCreate, OrderUpdate, OrderStatus
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.product_repository import ProductRepository


logger = logging.getLogger(__name__)

# Columns that may be cleared with an explicit null
NULLABLE_UPDATE_FIELDS = {'email', 'city', 'notes'}


def generate_order_number(order_date: date) -> str:
    """ORD-YYYYMMDD-XXXXXX with a random hex suffix"""
    return f"ORD-{order_date:%Y%m%d}-{secrets.token_hex(3).upper()}"


def calculate_subtotal(items: List[OrderItem]) -> Decimal:
    return sum((item.line_total for item in items), Decimal('0'))


class OrderService:
    """Service for order business logic"""

    def __init__(self, order_repo: OrderRepository = None, product_repo: ProductRepository = None,
                 transaction_factory=None):
        self.order_repo = order_repo or OrderRepository()
        self.product_repo = product_repo or ProductRepository()
        self._transaction = transaction_factory or transaction

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_orders(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> Tuple[List[Order], int]:
        return self.order_repo.find_all(
            status=status,
            search=search,
            from_date=from_date,
            to_date=to_date,
            limit=limit,
            offset=offset
        )

    def get_order(self, order_id: int) -> Optional[Order]:
        return self.order_repo.find_by_id(order_id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, data: OrderCreate) -> Order:
        """
        Create an order, taking its quantities out of stock

        Raises:
            InsufficientStockError: a product has less stock than ordered
        """
        items = [OrderItem(**item.model_dump()) for item in data.items]
        order_date = data.order_date or date.today()
        subtotal = calculate_subtotal(items)
        status = OrderStatus(data.status)

        with self._transaction() as conn:
            # A cancelled order holds no stock; re-opening it takes the stock
            if status != OrderStatus.CANCELLED:
                self._take_stock(items, conn, "Insufficient stock for {name}")

            order = self.order_repo.insert({
                'order_number': generate_order_number(order_date),
                'customer_name': data.customer_name,
                'phone': data.phone,
                'email': str(data.email) if data.email else None,
                'address': data.address,
                'city': data.city,
                'items': items,
                'shipping_method_id': data.shipping_method_id,
                'shipping_method_name': data.shipping_method_name,
                'shipping_cost': data.shipping_cost,
                'subtotal': subtotal,
                'total': subtotal + data.shipping_cost,
                'payment_method': data.payment_method,
                'status': status.value,
                'notes': data.notes,
                'order_date': order_date,
            }, conn)

        logger.info(f"Created order {order.order_number} ({order.total_quantity} units, total {order.total})")
        return order

    def update_order(self, order_id: int, data: OrderUpdate) -> Optional[Order]:
        """
        Update an order, keeping stock in line with status changes

        Returns:
            The updated order, or None if it does not exist

        Raises:
            InsufficientStockError: re-opening a cancelled order needs stock that is gone
        """
        changes: Dict = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_UPDATE_FIELDS
        }

        with self._transaction() as conn:
            current = self.order_repo.find_by_id(order_id, conn=conn, for_update=True)
            if current is None:
                return None

            new_status = OrderStatus(changes['status']) if 'status' in changes else None
            if new_status is not None:
                changes['status'] = new_status.value

                if new_status == OrderStatus.CANCELLED and not current.is_cancelled:
                    self._return_stock(current.items, conn)
                    logger.info(f"Order {current.order_number} cancelled, stock restored")

                elif current.is_cancelled and new_status != OrderStatus.CANCELLED:
                    self._take_stock(current.items, conn, "Insufficient stock to restore order for {name}")
                    logger.info(f"Order {current.order_number} re-opened as {new_status.value}, stock taken again")

            if 'shipping_cost' in changes:
                changes['total'] = current.subtotal + changes['shipping_cost']

            if changes.get('email') is not None:
                changes['email'] = str(changes['email'])

            return self.order_repo.update(order_id, changes, conn)

    def delete_order(self, order_id: int) -> Optional[Order]:
        """
        Delete an order, returning its stock unless it was cancelled

        Returns:
            The deleted order, or None if it does not exist
        """
        with self._transaction() as conn:
            order = self.order_repo.find_by_id(order_id, conn=conn, for_update=True)
            if order is None:
                return None

            if not order.is_cancelled:
                self._return_stock(order.items, conn)

            self.order_repo.delete(order_id, conn)

        logger.info(f"Deleted order {order.order_number}")
        return order

    # ------------------------------------------------------------------
    # Stock helpers
    # ------------------------------------------------------------------

    def _take_stock(self, items: List[OrderItem], conn, error_template: str):
        for item in items:
            if item.product_id is None:
                continue

            product = self.product_repo.find_by_id(item.product_id, conn=conn, for_update=True)
            if product is None:
                logger.warning(f"Product {item.product_id} ({item.name}) not found, skipping stock check")
                continue

            if product.stock < item.quantity:
                raise InsufficientStockError(error_template.format(name=product.name), product_id=product.id)

            self.product_repo.adjust_stock(product.id, -item.quantity, conn)

    def _return_stock(self, items: List[OrderItem], conn):
        for item in items:
            if item.product_id is None:
                continue

            product = self.product_repo.find_by_id(item.product_id, conn=conn, for_update=True)
            if product is None:
                logger.warning(f"Product {item.product_id} ({item.name}) not found, stock not restored")
                continue

            self.product_repo.adjust_stock(product.id, item.quantity, conn)
