from django.db import transaction
from rest_framework import serializers

from user.serializers import UserBriefSerializer
from .models import Category, Product, ProductImage, Review


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ("id", "name", "slug", "description")
        read_only_fields = ("slug",)


class ProductImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductImage
        fields = ("id", "image", "alt_text", "position")


class ProductBriefSerializer(serializers.ModelSerializer):
    # minimal product shape for cart lines and order items
    image = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = ("id", "name", "slug", "price", "stock", "image")

    def get_image(self, obj):
        images = list(obj.images.all())
        if not images:
            return None
        url = images[0].image.url
        request = self.context.get("request")
        return request.build_absolute_uri(url) if request else url


class ProductSerializer(serializers.ModelSerializer):
    categories = CategorySerializer(many=True, read_only=True)
    category_ids = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(), many=True, write_only=True,
        source="categories", required=False,
    )
    images = ProductImageSerializer(many=True, read_only=True)
    in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = (
            "id", "name", "slug", "description", "price", "stock", "in_stock",
            "categories", "category_ids", "images",
            "avg_rating", "review_count", "created_at", "updated_at",
        )
        read_only_fields = ("slug", "avg_rating", "review_count", "created_at", "updated_at")
        extra_kwargs = {"stock": {"required": True}}

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative")
        return value

    @transaction.atomic
    def create(self, validated_data):
        return super().create(validated_data)

    @transaction.atomic
    def update(self, instance, validated_data):
        # categories are replaced only when category_ids is sent
        return super().update(instance, validated_data)


class ReviewSerializer(serializers.ModelSerializer):
    user = UserBriefSerializer(read_only=True)

    class Meta:
        model = Review
        fields = ("id", "product", "user", "rating", "title", "comment", "created_at", "updated_at")
        read_only_fields = ("product", "user", "created_at", "updated_at")


class ProductDetailSerializer(ProductSerializer):
    reviews = ReviewSerializer(many=True, read_only=True)

    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + ("reviews",)
