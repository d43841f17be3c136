from django.contrib import admin

from .models import Notification, Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("product", "quantity", "price")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "status", "total_amount", "payment_method", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("user__email", "user__name")
    inlines = [OrderItemInline]


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "order", "read", "created_at")
    list_filter = ("read",)
