import io
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from cart.models import Cart, CartItem
from order.models import Order, OrderItem
from product.models import Category, Product, Review

pytestmark = pytest.mark.django_db

PRODUCTS_URL = "/api/v1/products/"


def png_upload(name="dress.png"):
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color=(200, 30, 30)).save(buffer, format="PNG")
    return SimpleUploadedFile(name, buffer.getvalue(), content_type="image/png")


class TestProductList:
    def test_list_is_public_and_paginated(self, api_client, make_product):
        for i in range(12):
            make_product(name=f"Dress {i}")

        response = api_client.get(PRODUCTS_URL)

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 12
        assert body["total_pages"] == 2
        assert body["page"] == 1
        assert len(body["results"]) == 10
        assert body["previous"] is None
        assert body["next"] is not None

    def test_limit_changes_page_size(self, api_client, make_product):
        for i in range(5):
            make_product(name=f"Dress {i}")

        body = api_client.get(PRODUCTS_URL, {"limit": 2, "page": 3}).json()

        assert body["total_pages"] == 3
        assert body["page"] == 3
        assert len(body["results"]) == 1

    def test_newest_first_by_default(self, api_client, make_product):
        first = make_product(name="Old")
        second = make_product(name="New")

        ids = [p["id"] for p in api_client.get(PRODUCTS_URL).json()["results"]]

        assert ids == [second.id, first.id]

    def test_filter_by_category_slug_and_id(self, api_client, make_product, category):
        other = Category.objects.create(name="Shoes")
        dress = make_product(name="Dress", categories=[category])
        make_product(name="Sneaker", categories=[other])

        by_slug = api_client.get(PRODUCTS_URL, {"category": "dresses"}).json()
        by_id = api_client.get(PRODUCTS_URL, {"category": category.id}).json()

        assert [p["id"] for p in by_slug["results"]] == [dress.id]
        assert [p["id"] for p in by_id["results"]] == [dress.id]

    def test_filter_by_price_range(self, api_client, make_product):
        make_product(name="Cheap", price="5.00")
        mid = make_product(name="Mid", price="20.00")
        make_product(name="Pricey", price="90.00")

        body = api_client.get(PRODUCTS_URL, {"min_price": "10", "max_price": "50"}).json()

        assert [p["id"] for p in body["results"]] == [mid.id]

    def test_filter_in_stock(self, api_client, make_product):
        available = make_product(name="Available", stock=3)
        make_product(name="Sold out", stock=0)

        body = api_client.get(PRODUCTS_URL, {"in_stock": "true"}).json()

        assert [p["id"] for p in body["results"]] == [available.id]

    def test_search_matches_name_and_description(self, api_client, make_product):
        linen = make_product(name="Linen shirt")
        silk = make_product(name="Blouse", description="Pure silk, hand washed")
        make_product(name="Jeans")

        linen_hits = api_client.get(PRODUCTS_URL, {"search": "linen"}).json()["results"]
        silk_hits = api_client.get(PRODUCTS_URL, {"search": "silk"}).json()["results"]

        assert [p["id"] for p in linen_hits] == [linen.id]
        assert [p["id"] for p in silk_hits] == [silk.id]

    def test_ordering_by_price(self, api_client, make_product):
        make_product(name="B", price="30.00")
        make_product(name="A", price="10.00")
        make_product(name="C", price="20.00")

        body = api_client.get(PRODUCTS_URL, {"ordering": "price"}).json()

        assert [p["price"] for p in body["results"]] == ["10.00", "20.00", "30.00"]


class TestProductDetail:
    def test_retrieve_includes_reviews(self, api_client, product, user):
        Review.objects.create(product=product, user=user, rating=4, title="Nice", comment="Fits well")

        response = api_client.get(f"{PRODUCTS_URL}{product.id}/")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == product.name
        assert body["in_stock"] is True
        assert body["categories"][0]["slug"] == "dresses"
        assert body["reviews"][0]["title"] == "Nice"
        assert body["avg_rating"] == "4.0"
        assert body["review_count"] == 1

    def test_missing_product_is_404(self, api_client):
        response = api_client.get(f"{PRODUCTS_URL}9999/")

        assert response.status_code == 404
        assert response.json()["status"] == "error"
        assert response.json()["status_code"] == 404


class TestProductAdmin:
    def test_create_requires_admin(self, auth_client, category):
        payload = {"name": "Gown", "description": "Evening gown", "price": "120.00", "stock": 2}

        response = auth_client.post(PRODUCTS_URL, payload, format="json")

        assert response.status_code == 403
        assert not Product.objects.filter(name="Gown").exists()

    def test_anonymous_create_is_rejected(self, api_client):
        payload = {"name": "Gown", "description": "Evening gown", "price": "120.00", "stock": 2}

        response = api_client.post(PRODUCTS_URL, payload, format="json")

        assert response.status_code in (401, 403)

    def test_admin_creates_product_with_categories(self, admin_client, category):
        payload = {
            "name": "Evening Gown",
            "description": "Floor length",
            "price": "120.00",
            "stock": 2,
            "category_ids": [category.id],
        }

        response = admin_client.post(PRODUCTS_URL, payload, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["slug"] == "evening-gown"
        assert [c["id"] for c in body["categories"]] == [category.id]
        assert Product.objects.get(pk=body["id"]).categories.count() == 1

    def test_duplicate_names_get_distinct_slugs(self, make_product):
        first = make_product(name="Maxi Dress")
        second = make_product(name="Maxi Dress")

        assert first.slug == "maxi-dress"
        assert second.slug == "maxi-dress-1"

    def test_negative_price_is_a_validation_error(self, admin_client):
        payload = {"name": "Broken", "description": "x", "price": "-1.00", "stock": 1}

        response = admin_client.post(PRODUCTS_URL, payload, format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid input data. Please check your request."
        assert "price" in body["errors"]

    def test_missing_stock_is_rejected(self, admin_client):
        payload = {"name": "No stock", "description": "x", "price": "1.00"}

        response = admin_client.post(PRODUCTS_URL, payload, format="json")

        assert response.status_code == 400
        assert "stock" in response.json()["errors"]

    def test_partial_update_keeps_categories(self, admin_client, product, category):
        response = admin_client.patch(f"{PRODUCTS_URL}{product.id}/", {"price": "19.99"}, format="json")

        assert response.status_code == 200
        product.refresh_from_db()
        assert product.price == Decimal("19.99")
        assert list(product.categories.all()) == [category]

    def test_delete_removes_dependent_rows(self, admin_client, product, user):
        Review.objects.create(product=product, user=user, rating=5, title="Great", comment="Love it")
        cart = Cart.objects.create(user=user)
        CartItem.objects.create(cart=cart, product=product, quantity=1)
        order = Order.objects.create(user=user, total_amount=product.price, payment_method="card")
        OrderItem.objects.create(order=order, product=product, quantity=1, price=product.price)

        response = admin_client.delete(f"{PRODUCTS_URL}{product.id}/")

        assert response.status_code == 204
        assert not Product.objects.filter(pk=product.pk).exists()
        assert not Review.objects.exists()
        assert not CartItem.objects.exists()
        assert not OrderItem.objects.exists()
        assert Order.objects.filter(pk=order.pk).exists()

    def test_admin_uploads_image(self, admin_client, product):
        response = admin_client.post(
            f"{PRODUCTS_URL}{product.id}/images/",
            {"image": png_upload(), "alt_text": "Front", "position": 0},
            format="multipart",
        )

        assert response.status_code == 201
        assert product.images.count() == 1
        listed = admin_client.get(f"{PRODUCTS_URL}{product.id}/").json()
        assert listed["images"][0]["alt_text"] == "Front"


class TestCategories:
    def test_categories_are_public_and_unpaginated(self, api_client, category):
        Category.objects.create(name="Accessories")

        response = api_client.get("/api/v1/categories/")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Accessories", "Dresses"]

    def test_only_admin_creates_categories(self, auth_client, admin_client):
        denied = auth_client.post("/api/v1/categories/", {"name": "Hats"}, format="json")
        created = admin_client.post("/api/v1/categories/", {"name": "Hats"}, format="json")

        assert denied.status_code == 403
        assert created.status_code == 201
        assert created.json()["slug"] == "hats"

    def test_duplicate_category_name_is_rejected(self, admin_client, category):
        response = admin_client.post("/api/v1/categories/", {"name": "Dresses"}, format="json")

        assert response.status_code == 400
        assert "name" in response.json()["errors"]
