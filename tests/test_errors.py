import pytest
from django.db import IntegrityError
from rest_framework import exceptions
from rest_framework.test import APIRequestFactory

from product.models import Product
from shopfront.exceptions import api_exception_handler, message_from_detail


def handle(exc):
    request = APIRequestFactory().get("/api/v1/anything/")
    return api_exception_handler(exc, {"request": request, "view": None})


class TestExceptionHandler:
    def test_api_exception_keeps_status_and_message(self):
        response = handle(exceptions.PermissionDenied("Nope"))

        assert response.status_code == 403
        assert response.data == {"status": "error", "status_code": 403, "message": "Nope"}

    def test_validation_error_carries_field_errors(self):
        response = handle(exceptions.ValidationError({"quantity": ["Too small."]}))

        assert response.status_code == 400
        assert response.data["message"] == "Invalid input data. Please check your request."
        assert response.data["errors"] == {"quantity": ["Too small."]}

    def test_integrity_error_is_conflict(self):
        response = handle(IntegrityError("UNIQUE constraint failed"))

        assert response.status_code == 409
        assert response.data["status_code"] == 409

    def test_does_not_exist_is_not_found(self):
        response = handle(Product.DoesNotExist("Product matching query does not exist."))

        assert response.status_code == 404
        assert response.data["message"] == "Product matching query does not exist."

    def test_unexpected_error_is_500(self, settings):
        settings.DEBUG = False

        response = handle(RuntimeError("boom"))

        assert response.status_code == 500
        assert response.data == {
            "status": "error",
            "status_code": 500,
            "message": "Internal Server Error",
        }

    def test_debug_adds_stack(self, settings):
        settings.DEBUG = True

        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            response = handle(exc)

        assert response.data["error"] == "boom"
        assert "RuntimeError" in response.data["stack"]

    @pytest.mark.parametrize(
        "detail, expected",
        [
            ("plain", "plain"),
            (["first", "second"], "first"),
            ({"detail": "wrapped"}, "wrapped"),
            ({"field": ["bad"]}, "Invalid input data. Please check your request."),
        ],
    )
    def test_message_from_detail(self, detail, expected):
        assert message_from_detail(detail) == expected


@pytest.mark.django_db
class TestHealthAndFallbacks:
    def test_health(self, api_client):
        response = api_client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "UP", "message": "API is healthy"}

    def test_unknown_api_route_is_json_404(self, api_client, settings):
        settings.DEBUG = False

        response = api_client.get("/api/v1/nowhere/")

        assert response.status_code == 404
        assert response.json()["status"] == "error"

    def test_schema_is_served(self, api_client):
        response = api_client.get("/api/v1/schema/")

        assert response.status_code == 200
