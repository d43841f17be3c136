from django.urls import path

from .views import CartClearAPIView, CartDetailAPIView, CartItemDetailAPIView, CartItemListAPIView

urlpatterns = [
    path("", CartDetailAPIView.as_view(), name="cart-detail"),
    path("items/", CartItemListAPIView.as_view(), name="cart-item-list"),
    path("items/<int:pk>/", CartItemDetailAPIView.as_view(), name="cart-item-detail"),
    path("clear/", CartClearAPIView.as_view(), name="cart-clear"),
]
