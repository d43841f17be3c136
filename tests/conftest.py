from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from product.models import Category, Product

PASSWORD = "Str0ng-Passw0rd!"


@pytest.fixture(autouse=True)
def _media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "media"


@pytest.fixture()
def api_client():
    return APIClient()


@pytest.fixture()
def user(django_user_model):
    return django_user_model.objects.create_user(
        email="alice@example.com", name="Alice", password=PASSWORD
    )


@pytest.fixture()
def other_user(django_user_model):
    return django_user_model.objects.create_user(
        email="bob@example.com", name="Bob", password=PASSWORD
    )


@pytest.fixture()
def admin_user(django_user_model):
    return django_user_model.objects.create_superuser(
        email="admin@example.com", name="Admin", password=PASSWORD
    )


@pytest.fixture()
def auth_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def other_client(other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture()
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture()
def category(db):
    return Category.objects.create(name="Dresses")


@pytest.fixture()
def make_product(db):
    def make(name="Summer Dress", price="25.00", stock=10, categories=(), **extra):
        product = Product.objects.create(
            name=name,
            description=extra.pop("description", f"{name} description"),
            price=Decimal(price),
            stock=stock,
            **extra,
        )
        if categories:
            product.categories.set(categories)
        return product

    return make


@pytest.fixture()
def product(make_product, category):
    return make_product(categories=[category])


@pytest.fixture()
def checkout_payload():
    address = {
        "full_name": "Alice Example",
        "line1": "1 Main Street",
        "city": "Springfield",
        "postal_code": "12345",
        "country": "US",
    }
    return {
        "shipping_address": address,
        "billing_address": address,
        "payment_method": "card",
        "payment_token": "tok_visa",
    }
