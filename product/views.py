import logging

from django.db import transaction
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from cart.models import CartItem
from order.models import OrderItem
from .filters import ProductFilter
from .models import Category, Product, ProductImage, Review
from .permissions import IsOwnerOrReadOnly
from .serializers import (
    CategorySerializer, ProductDetailSerializer, ProductImageSerializer,
    ProductSerializer, ReviewSerializer,
)

logger = logging.getLogger(__name__)


class CategoryViewSet(viewsets.ModelViewSet):
    queryset = Category.objects.all().order_by("name")
    serializer_class = CategorySerializer
    pagination_class = None

    def get_permissions(self):
        if self.request.method in permissions.SAFE_METHODS:
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]


class ProductViewSet(viewsets.ModelViewSet):
    queryset = Product.objects.all().prefetch_related("categories", "images")
    serializer_class = ProductSerializer
    parser_classes = (JSONParser, MultiPartParser, FormParser)
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = ProductFilter
    search_fields = ["name", "description"]
    ordering_fields = ["price", "name", "created_at"]
    ordering = ["-created_at", "-id"]

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [permissions.AllowAny()]
        if self.action == "reviews":
            if self.request.method in permissions.SAFE_METHODS:
                return [permissions.AllowAny()]
            return [permissions.IsAuthenticated()]
        return [permissions.IsAdminUser()]

    def get_queryset(self):
        qs = super().get_queryset()
        if self.action == "retrieve":
            qs = qs.prefetch_related("reviews__user")
        return qs

    def get_serializer_class(self):
        if self.action == "retrieve":
            return ProductDetailSerializer
        return ProductSerializer

    def perform_destroy(self, instance):
        # remove everything that points at the product in one go
        with transaction.atomic():
            instance.categories.clear()
            Review.objects.filter(product=instance).delete()
            CartItem.objects.filter(product=instance).delete()
            OrderItem.objects.filter(product=instance).delete()
            instance.delete()
        logger.info("Product %s deleted", instance.name)

    @action(detail=True, methods=["get", "post"])
    def reviews(self, request, pk=None):
        """
        GET  /api/v1/products/<id>/reviews/ -> reviews for the product, newest first
        POST /api/v1/products/<id>/reviews/ -> { "rating": 1..5, "title": "...", "comment": "..." }
        """
        product = self.get_object()

        if request.method == "GET":
            qs = product.reviews.select_related("user")
            return Response(ReviewSerializer(qs, many=True).data)

        serializer = ReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        # the (product, user) unique constraint answers duplicates with 409
        with transaction.atomic():
            serializer.save(user=request.user, product=product)
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], parser_classes=[MultiPartParser, FormParser])
    def images(self, request, pk=None):
        product = self.get_object()
        serializer = ProductImageSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        serializer.save(product=product)
        return Response(serializer.data, status=status.HTTP_201_CREATED)


class ReviewViewSet(mixins.ListModelMixin,
                    mixins.RetrieveModelMixin,
                    mixins.UpdateModelMixin,
                    mixins.DestroyModelMixin,
                    viewsets.GenericViewSet):
    queryset = Review.objects.select_related("user", "product").all()
    serializer_class = ReviewSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsOwnerOrReadOnly]
    filter_backends = [SearchFilter, OrderingFilter]
    search_fields = ["title", "comment", "product__name"]
    ordering_fields = ["created_at", "rating"]
    ordering = ["-created_at", "-id"]
