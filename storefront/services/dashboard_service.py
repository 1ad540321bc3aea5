"""
Dashboard Service
Back-office overview figures computed from orders and products
"""
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from dateutil.relativedelta import relativedelta

from storefront.domain.order import Order, OrderStatus
from storefront.domain.product import Product
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.product_repository import ProductRepository


RECENT_ORDERS_LIMIT = 5
MONTHS_OF_HISTORY = 12


def monthly_revenue(orders: List[Order], today: date, months: int = MONTHS_OF_HISTORY) -> List[Dict]:
    """
    Revenue and order count per month for the last `months` months,
    oldest first, current month included. Cancelled orders are ignored.
    """
    start = today.replace(day=1) - relativedelta(months=months - 1)

    buckets: "OrderedDict[str, Dict]" = OrderedDict()
    for i in range(months):
        month = start + relativedelta(months=i)
        buckets[f"{month:%Y-%m}"] = {'month': f"{month:%Y-%m}", 'revenue': Decimal('0'), 'orders': 0}

    for order in orders:
        if order.is_cancelled:
            continue
        key = f"{order.order_date:%Y-%m}"
        if key in buckets:
            buckets[key]['revenue'] += order.total
            buckets[key]['orders'] += 1

    return [
        {'month': bucket['month'], 'revenue': float(bucket['revenue']), 'orders': bucket['orders']}
        for bucket in buckets.values()
    ]


def build_dashboard(orders: List[Order], products: List[Product], today: Optional[date] = None) -> Dict:
    """
    Aggregate dashboard figures

    Args:
        orders: All orders, newest first
        products: All products
        today: Reference date for the monthly series (defaults to today)
    """
    today = today or date.today()

    billable = [order for order in orders if not order.is_cancelled]
    total_revenue = sum((order.total for order in billable), Decimal('0'))

    orders_by_status = {status.value: 0 for status in OrderStatus}
    for order in orders:
        orders_by_status[order.status] = orders_by_status.get(order.status, 0) + 1

    low_stock = sorted(
        (product for product in products if product.is_low_stock),
        key=lambda product: product.stock
    )

    return {
        'totals': {
            'revenue': float(total_revenue),
            'orders': len(orders),
            'pending_orders': orders_by_status[OrderStatus.PENDING.value],
            'average_order_value': float(total_revenue / len(billable)) if billable else 0.0,
            'products': len(products),
            'out_of_stock': sum(1 for product in products if product.is_out_of_stock),
            'low_stock': len(low_stock),
            'units_in_stock': sum(max(product.stock, 0) for product in products),
        },
        'orders_by_status': orders_by_status,
        'monthly_revenue': monthly_revenue(orders, today),
        'low_stock_products': [
            {'id': product.id, 'name': product.name, 'stock': product.stock, 'category': product.category}
            for product in low_stock
        ],
        'recent_orders': [order.to_dict() for order in orders[:RECENT_ORDERS_LIMIT]],
    }


class DashboardService:

    def __init__(self, order_repo: OrderRepository = None, product_repo: ProductRepository = None):
        self.order_repo = order_repo or OrderRepository()
        self.product_repo = product_repo or ProductRepository()

    def get_dashboard(self, today: Optional[date] = None) -> Dict:
        return build_dashboard(self.order_repo.list_all(), self.product_repo.list_all(), today=today)
