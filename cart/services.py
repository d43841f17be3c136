"""
Cart operations shared by the REST API and the server-rendered shop.

Every mutating call returns the refreshed cart so callers can render the
new state directly.
"""
import logging

from django.db.models import Prefetch
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from .exceptions import InsufficientStock
from .models import Cart, CartItem

logger = logging.getLogger(__name__)


def _items_prefetch():
    return Prefetch(
        "items",
        queryset=CartItem.objects.select_related("product").prefetch_related("product__images"),
    )


def _check_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be a positive integer."]})


def get_cart(user):
    """Return the user's cart with items and products loaded, creating it on first access."""
    cart, created = Cart.objects.get_or_create(user=user)
    if created:
        logger.debug("Created cart %s for user %s", cart.pk, user.pk)
    return Cart.objects.prefetch_related(_items_prefetch()).get(pk=cart.pk)


def add_item(user, product, quantity=1):
    """
    Add ``quantity`` of ``product``; an existing line for the product is
    increased instead of duplicated. Returns ``(cart, created)``.
    """
    _check_quantity(quantity)
    cart, _ = Cart.objects.get_or_create(user=user)
    item = CartItem.objects.filter(cart=cart, product=product).first()

    requested = (item.quantity if item else 0) + quantity
    if product.stock < requested:
        raise InsufficientStock(product.name, product.stock, requested)

    if item:
        item.quantity = requested
        item.save(update_fields=["quantity"])
    else:
        CartItem.objects.create(cart=cart, product=product, quantity=quantity)
    cart.save(update_fields=["updated_at"])
    return get_cart(user), item is None


def _owned_item(user, item_id):
    try:
        item = CartItem.objects.select_related("product", "cart").get(pk=item_id)
    except CartItem.DoesNotExist:
        raise NotFound("Cart item not found.")
    if item.cart.user_id != user.pk:
        raise PermissionDenied("Forbidden: You do not own this cart item.")
    return item


def update_item(user, item_id, quantity):
    _check_quantity(quantity)
    item = _owned_item(user, item_id)
    if item.product.stock < quantity:
        raise InsufficientStock(item.product.name, item.product.stock, quantity)
    item.quantity = quantity
    item.save(update_fields=["quantity"])
    return get_cart(user)


def remove_item(user, item_id):
    item = _owned_item(user, item_id)
    item.delete()
    return get_cart(user)


def clear_cart(user):
    cart, _ = Cart.objects.get_or_create(user=user)
    deleted, _ = cart.items.all().delete()
    logger.debug("Cleared %s items from cart %s", deleted, cart.pk)
    return get_cart(user)
