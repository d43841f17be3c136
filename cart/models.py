from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from product.models import Product

User = settings.AUTH_USER_MODEL

CENTS = Decimal("0.01")


class Cart(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="cart")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Cart for {self.user_id}"

    @property
    def subtotal(self):
        total = sum((item.line_total for item in self.items.all()), Decimal("0"))
        return total.quantize(CENTS)

    @property
    def tax(self):
        return Decimal("0.00")

    @property
    def total(self):
        return (self.subtotal + self.tax).quantize(CENTS)

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items.all())


class CartItem(models.Model):
    # one row per (cart, product) is kept by the cart service, not the schema
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="cart_items")
    quantity = models.PositiveIntegerField(default=1)
    added_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("added_at", "id")

    def __str__(self):
        return f"{self.cart_id} - {self.product_id} x{self.quantity}"

    @property
    def line_total(self):
        return (self.product.price * self.quantity).quantize(CENTS)
