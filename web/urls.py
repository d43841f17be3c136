from django.urls import path

from . import views

app_name = "web"

urlpatterns = [
    path("", views.home, name="home"),
    path("products/", views.product_list, name="product-list"),
    path("products/<int:pk>/", views.product_detail, name="product-detail"),
    path("products/<int:pk>/reviews/", views.review_create, name="review-create"),
    path("products/<int:pk>/add-to-cart/", views.cart_add, name="cart-add"),
    path("cart/", views.cart_view, name="cart"),
    path("cart/items/<int:item_id>/update/", views.cart_update, name="cart-update"),
    path("cart/items/<int:item_id>/remove/", views.cart_remove, name="cart-remove"),
    path("checkout/", views.checkout, name="checkout"),
    path("orders/", views.order_list, name="orders"),
    path("login/", views.login_view, name="login"),
    path("logout/", views.logout_view, name="logout"),
]
