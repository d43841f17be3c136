# product/signals.py
from django.db.models import Avg, Count
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Product, Review


@receiver([post_save, post_delete], sender=Review)
def update_product_rating_on_review_change(sender, instance, **kwargs):
    agg = Review.objects.filter(product_id=instance.product_id).aggregate(
        avg=Avg("rating"), count=Count("id")
    )
    avg = agg.get("avg") or 0
    count = agg.get("count") or 0
    # round to 1 decimal
    Product.objects.filter(pk=instance.product_id).update(
        avg_rating=round(float(avg), 1), review_count=count
    )
