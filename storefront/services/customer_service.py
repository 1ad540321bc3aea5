"""
Customer Service
Customers are not stored separately; they are derived from order history.
"""
from typing import Dict, List

from storefront.domain.order import Order
from storefront.repositories.order_repository import OrderRepository


def summarize_customers(orders: List[Order]) -> List[Dict]:
    """
    Group orders by (customer name, phone)

    The location kept for each customer is the address of their most
    recent order.

    Returns:
        Customers sorted by total spent, highest first
    """
    customers: Dict[tuple, Dict] = {}

    for order in orders:
        key = (order.customer_name, order.phone)
        customer = customers.get(key)

        if customer is None:
            customers[key] = {
                'name': order.customer_name,
                'phone': order.phone,
                'email': order.email,
                'location': order.address,
                'total_orders': 1,
                'total_spent': order.total,
                'last_order_date': order.order_date,
            }
        else:
            customer['total_orders'] += 1
            customer['total_spent'] += order.total
            customer['email'] = customer['email'] or order.email
            if order.order_date > customer['last_order_date']:
                customer['last_order_date'] = order.order_date
                customer['location'] = order.address

    result = sorted(customers.values(), key=lambda c: c['total_spent'], reverse=True)

    return [
        {
            **customer,
            'total_spent': float(customer['total_spent']),
            'last_order_date': customer['last_order_date'].isoformat(),
        }
        for customer in result
    ]


class CustomerService:

    def __init__(self, order_repo: OrderRepository = None):
        self.order_repo = order_repo or OrderRepository()

    def get_customers(self) -> List[Dict]:
        return summarize_customers(self.order_repo.list_all())

