"""
Checkout Service
Prices a browser cart against the catalog and turns it into an order
"""
import logging
from decimal import Decimal
from typing import Dict, List

from storefront.core.exceptions import CheckoutError
from storefront.domain.cart import Cart, CartLine, CartQuote, CheckoutRequest, QuoteLine
from storefront.domain.order import Order, OrderCreate, OrderItemCreate
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.shipping_repository import ShippingMethodRepository
from storefront.services.order_service import OrderService


logger = logging.getLogger(__name__)


def merge_cart_lines(lines: List[CartLine]) -> List[CartLine]:
    """Combine lines for the same product, keeping first-seen order"""
    quantities: Dict[int, int] = {}
    for line in lines:
        quantities[line.product_id] = quantities.get(line.product_id, 0) + line.quantity
    return [CartLine(product_id=product_id, quantity=qty) for product_id, qty in quantities.items()]


class CheckoutService:

    def __init__(self, product_repo: ProductRepository = None,
                 shipping_repo: ShippingMethodRepository = None,
                 order_service: OrderService = None):
        self.product_repo = product_repo or ProductRepository()
        self.shipping_repo = shipping_repo or ShippingMethodRepository()
        self.order_service = order_service or OrderService(product_repo=self.product_repo)

    def quote(self, cart: Cart) -> CartQuote:
        """
        Price a cart using catalog prices

        Problems (missing products, short stock, unusable shipping method)
        are reported in `issues` rather than raised, so the storefront can
        show them next to the cart.
        """
        lines = merge_cart_lines(cart.items)
        products = {
            product.id: product
            for product in self.product_repo.find_by_ids([line.product_id for line in lines])
        }

        quote = CartQuote(shipping_method_id=cart.shipping_method_id)

        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                quote.issues.append(f"Product {line.product_id} is no longer available")
                continue

            if product.is_out_of_stock:
                quote.issues.append(f"{product.name} is out of stock")
            elif product.stock < line.quantity:
                quote.issues.append(f"Only {product.stock} left of {product.name}")

            quote.lines.append(QuoteLine(
                product_id=product.id,
                name=product.name,
                quantity=line.quantity,
                price=product.price,
                line_total=product.price * line.quantity,
                available_stock=max(product.stock, 0)
            ))

        if cart.shipping_method_id is not None:
            method = self.shipping_repo.find_by_id(cart.shipping_method_id)
            if method is None or not method.is_active:
                quote.issues.append("Selected shipping method is not available")
            else:
                quote.shipping_method_name = method.name
                quote.shipping_cost = method.cost

        quote.subtotal = sum((line.line_total for line in quote.lines), Decimal('0'))
        quote.total = quote.subtotal + quote.shipping_cost
        return quote

    def place_order(self, request: CheckoutRequest) -> Order:
        """
        Place a cash-on-delivery order for the cart

        Raises:
            CheckoutError: the cart has issues or no shipping method was chosen
            InsufficientStockError: stock ran out between quote and order
        """
        quote = self.quote(request)

        issues = list(quote.issues)
        if request.shipping_method_id is None:
            issues.append("Choose a shipping method")

        if issues:
            raise CheckoutError("Cart cannot be checked out", issues)

        order = self.order_service.create_order(OrderCreate(
            customer_name=request.customer_name,
            phone=request.phone,
            email=request.email,
            address=request.address,
            city=request.city,
            items=[
                OrderItemCreate(
                    product_id=line.product_id,
                    name=line.name,
                    quantity=line.quantity,
                    price=line.price
                )
                for line in quote.lines
            ],
            shipping_method_id=quote.shipping_method_id,
            shipping_method_name=quote.shipping_method_name,
            shipping_cost=quote.shipping_cost,
            notes=request.notes
        ))

        logger.info(f"Checkout placed order {order.order_number} for {order.customer_name}")
        return order
