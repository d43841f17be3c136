import pytest
from django.contrib.auth import get_user_model

from tests.conftest import PASSWORD

pytestmark = pytest.mark.django_db

User = get_user_model()


def signup_payload(**overrides):
    payload = {
        "email": "carol@example.com",
        "name": "Carol",
        "phone_number": "+15551234567",
        "password1": PASSWORD,
        "password2": PASSWORD,
    }
    payload.update(overrides)
    return payload


class TestSignup:
    def test_creates_account(self, api_client):
        response = api_client.post("/api/v1/user/signup/", signup_payload(), format="json")

        assert response.status_code == 201
        assert response.json()["user"]["email"] == "carol@example.com"
        user = User.objects.get(email="carol@example.com")
        assert user.check_password(PASSWORD)
        assert not user.is_staff

    def test_password_mismatch(self, api_client):
        response = api_client.post(
            "/api/v1/user/signup/", signup_payload(password2="Other-Passw0rd!"), format="json"
        )

        assert response.status_code == 400
        assert "password2" in response.json()["errors"]

    def test_weak_password(self, api_client):
        response = api_client.post(
            "/api/v1/user/signup/", signup_payload(password1="123", password2="123"), format="json"
        )

        assert response.status_code == 400
        assert not User.objects.filter(email="carol@example.com").exists()

    def test_duplicate_email(self, api_client, user):
        response = api_client.post(
            "/api/v1/user/signup/", signup_payload(email=user.email.upper()), format="json"
        )

        assert response.status_code == 400
        assert "email" in response.json()["errors"]

    def test_bad_phone_number(self, api_client):
        response = api_client.post(
            "/api/v1/user/signup/", signup_payload(phone_number="call me"), format="json"
        )

        assert response.status_code == 400
        assert "phone_number" in response.json()["errors"]


class TestLogin:
    def test_sets_token_cookies(self, api_client, user):
        response = api_client.post(
            "/api/v1/user/login/", {"email": user.email, "password": PASSWORD}, format="json"
        )

        assert response.status_code == 200
        assert response.cookies["access_token"]["httponly"]
        assert response.cookies["refresh_token"].value

    def test_cookie_authenticates_later_requests(self, api_client, user):
        api_client.post("/api/v1/user/login/", {"email": user.email, "password": PASSWORD}, format="json")

        response = api_client.get("/api/v1/user/profile/")

        assert response.status_code == 200
        assert response.json()["email"] == user.email

    def test_bearer_header_also_works(self, api_client, user):
        login = api_client.post(
            "/api/v1/user/login/", {"email": user.email, "password": PASSWORD}, format="json"
        )
        token = login.cookies["access_token"].value
        api_client.cookies.clear()

        response = api_client.get("/api/v1/user/profile/", HTTP_AUTHORIZATION=f"Bearer {token}")

        assert response.status_code == 200

    def test_wrong_password(self, api_client, user):
        response = api_client.post(
            "/api/v1/user/login/", {"email": user.email, "password": "wrong"}, format="json"
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_logout_clears_cookies(self, api_client, user):
        api_client.post("/api/v1/user/login/", {"email": user.email, "password": PASSWORD}, format="json")

        response = api_client.post("/api/v1/user/logout/")

        assert response.status_code == 200
        assert response.cookies["access_token"].value == ""


class TestProfile:
    def test_anonymous_is_rejected(self, api_client):
        assert api_client.get("/api/v1/user/profile/").status_code == 401

    def test_update_name_and_phone(self, auth_client, user):
        response = auth_client.patch(
            "/api/v1/user/profile/", {"name": "Alice B", "phone_number": "+4420123456"}, format="json"
        )

        assert response.status_code == 200
        user.refresh_from_db()
        assert user.name == "Alice B"
        assert user.phone_number == "+4420123456"

    def test_email_is_read_only(self, auth_client, user):
        auth_client.patch("/api/v1/user/profile/", {"email": "new@example.com"}, format="json")

        user.refresh_from_db()
        assert user.email == "alice@example.com"
