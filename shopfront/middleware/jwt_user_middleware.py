from django.utils.deprecation import MiddlewareMixin
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken


class JWTUserMiddleware(MiddlewareMixin):
    """
    Resolve ``request.user`` from the JWT cookie for the server-rendered
    pages. API views authenticate through DRF and are left alone.
    """

    def process_request(self, request):
        if request.path.startswith("/api/") or request.user.is_authenticated:
            return None
        try:
            result = JWTAuthentication().authenticate(request)
        except (InvalidToken, AuthenticationFailed):
            return None
        if result is not None:
            request.user = result[0]
        return None
