from django.urls import path

from .views import notifications, order_detail, order_status, orders

urlpatterns = [
    path("", orders, name="orders"),
    path("notifications/", notifications, name="notifications"),
    path("<int:order_id>/", order_detail, name="order-detail"),
    path("<int:order_id>/status/", order_status, name="order-status"),
]
