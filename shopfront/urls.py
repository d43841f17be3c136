"""
URL configuration for shopfront project.

API routes live under /api/v1/; the server-rendered shop is mounted at the
site root.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from .views import api_not_found, health

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/health", health, name="health"),
    path("api/v1/user/", include("user.urls")),
    path("api/v1/", include("product.urls")),
    path("api/v1/cart/", include("cart.urls")),
    path("api/v1/orders/", include("order.urls")),
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),  # OpenAPI JSON/YAML
    path("api/v1/schema/swagger-ui/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/v1/schema/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("", include("web.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

handler404 = api_not_found
