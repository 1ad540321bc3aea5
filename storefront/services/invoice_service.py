"""
Invoice Service
Printable invoice data for an order
"""
from typing import Dict

from storefront.core.config import settings
from storefront.domain.order import Order


def build_invoice(order: Order) -> Dict:
    """Invoice document for an order, amounts in the store currency"""
    return {
        'store': {
            'name': settings.STORE_NAME,
            'tagline': settings.STORE_TAGLINE,
            'support_email': settings.SUPPORT_EMAIL,
        },
        'invoice_number': order.order_number,
        'order_id': order.id,
        'date': order.order_date.isoformat(),
        'status': order.status,
        'payment_method': order.payment_method,
        'bill_to': {
            'name': order.customer_name,
            'address': order.address,
            'city': order.city,
            'phone': order.phone,
            'email': order.email,
        },
        'lines': [
            {
                'name': item.name,
                'quantity': item.quantity,
                'unit_price': float(item.price),
                'line_total': float(item.line_total),
            }
            for item in order.items
        ],
        'currency': settings.CURRENCY,
        'subtotal': float(order.subtotal),
        'shipping': float(order.shipping_cost),
        'shipping_method': order.shipping_method_name,
        'total': float(order.total),
    }
