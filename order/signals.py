import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from .models import Notification, Order

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Order)
def order_pre_save(sender, instance, **kwargs):
    if instance.pk:
        instance._old_status = (
            Order.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
        )
    else:
        instance._old_status = None


@receiver(post_save, sender=Order)
def order_post_save(sender, instance, created, **kwargs):
    if created:
        return

    old_status = getattr(instance, "_old_status", None)
    new_status = instance.status

    if old_status == new_status:
        return

    message = f"Your order #{instance.id} is now {new_status}"
    Notification.objects.create(user_id=instance.user_id, order=instance, message=message)

    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    async_to_sync(channel_layer.group_send)(
        f"user_{instance.user_id}",
        {
            "type": "send_notification",  # Handler method name in consumer
            "data": {
                "order_id": instance.id,
                "status": new_status,
                "message": message,
            },
        },
    )
    logger.debug("Status notification sent for order %s", instance.id)
