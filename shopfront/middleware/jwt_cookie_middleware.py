from django.utils.deprecation import MiddlewareMixin


class JWTAuthCookieMiddleware(MiddlewareMixin):
    """Expose the access token cookie as a Bearer header for JWTAuthentication."""

    COOKIE_NAMES = ("access_token", "access", "jwt_access")

    def process_request(self, request):
        if request.META.get("HTTP_AUTHORIZATION"):
            return None
        for name in self.COOKIE_NAMES:
            token = request.COOKIES.get(name)
            if token:
                request.META["HTTP_AUTHORIZATION"] = f"Bearer {token}"
                break
        return None
