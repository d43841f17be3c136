"""
Checkout and order status changes.

``create_order`` is the only multi-step write in the shop: it turns the
user's cart into an order inside a single database transaction, so either
the order exists with its items, the stock is decremented and the cart is
empty, or nothing changed at all.
"""
import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from rest_framework.exceptions import ValidationError

from cart import services as cart_services
from cart.exceptions import InsufficientStock
from cart.models import CartItem
from product.models import Product
from .exceptions import CartEmpty, ProductUnavailable
from .models import Order, OrderItem

logger = logging.getLogger(__name__)

PAYMENT_SIMULATED_SUCCESS = "SIMULATED_SUCCESS"


def order_queryset():
    return Order.objects.select_related("user").prefetch_related("items__product__images")


def create_order(user, shipping_address, billing_address, payment_method, payment_token):
    """
    Create an order from ``user``'s cart.

    Prices are read from the product rows inside the transaction and copied
    onto the order items; later price changes never touch the order. The
    payment token is not sent anywhere, its presence counts as a successful
    payment.

    Raises ``CartEmpty``, ``InsufficientStock`` or ``ProductUnavailable``;
    any of them leaves the database untouched.
    """
    if not payment_token:
        raise ValidationError({"payment_token": ["Payment token is required."]})

    cart = cart_services.get_cart(user)
    items = list(cart.items.all())
    if not items:
        raise CartEmpty()

    with transaction.atomic():
        # stock may have moved since the cart was read, so check it again
        # against locked rows
        lines = []
        total = Decimal("0")
        for item in items:
            try:
                product = Product.objects.select_for_update().get(pk=item.product_id)
            except Product.DoesNotExist:
                raise ProductUnavailable(item.product_id)
            if product.stock < item.quantity:
                logger.info(
                    "Checkout for user %s rejected: %s has %s left, %s requested",
                    user.pk, product.name, product.stock, item.quantity,
                )
                raise InsufficientStock(product.name, product.stock, item.quantity)
            lines.append((product, item.quantity))
            total += product.price * item.quantity

        order = Order.objects.create(
            user=user,
            status=Order.Status.PENDING,
            total_amount=total.quantize(Decimal("0.01")),
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment_method=payment_method,
            payment_result={"token": payment_token, "status": PAYMENT_SIMULATED_SUCCESS},
        )
        OrderItem.objects.bulk_create([
            OrderItem(order=order, product=product, quantity=quantity, price=product.price)
            for product, quantity in lines
        ])

        for product, quantity in lines:
            Product.objects.filter(pk=product.pk).update(stock=F("stock") - quantity)

        # the cart row stays, only its lines go
        CartItem.objects.filter(cart=cart).delete()

    logger.info(
        "Order %s created for user %s: %s lines, total %s",
        order.pk, user.pk, len(lines), order.total_amount,
    )
    return order_queryset().get(pk=order.pk)


def update_status(order, new_status):
    """Set ``order.status`` from a case-insensitive status name."""
    value = str(new_status or "").strip().upper()
    if value not in Order.Status.values:
        allowed = ", ".join(Order.Status.values)
        raise ValidationError({"status": [f"Invalid status. Allowed statuses are: {allowed}"]})

    order.status = value
    order.save(update_fields=["status", "updated_at"])
    logger.info("Order %s moved to %s", order.pk, value)
    return order
