import logging

import jwt
from channels.db import database_sync_to_async
from django.conf import settings

logger = logging.getLogger(__name__)

# Sockets authenticate with the same access_token cookie as the HTTP API.


@database_sync_to_async
def get_user(user_id):
    from django.contrib.auth import get_user_model
    from django.contrib.auth.models import AnonymousUser

    User = get_user_model()
    try:
        return User.objects.get(id=user_id)
    except User.DoesNotExist:
        return AnonymousUser()


def token_from_cookies(raw_cookies):
    for part in raw_cookies.split(";"):
        name, _, value = part.strip().partition("=")
        if name == "access_token" and value:
            return value
    return None


class JWTAuthMiddleware:
    def __init__(self, inner):
        self.inner = inner

    async def __call__(self, scope, receive, send):
        from django.contrib.auth.models import AnonymousUser

        headers = dict(scope.get("headers", []))
        token = token_from_cookies(headers.get(b"cookie", b"").decode())

        scope = dict(scope)
        scope["user"] = AnonymousUser()
        if token:
            try:
                payload = jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
            except jwt.InvalidTokenError as exc:
                logger.debug("Rejected socket token: %s", exc)
            else:
                scope["user"] = await get_user(payload.get("user_id"))

        return await self.inner(scope, receive, send)
