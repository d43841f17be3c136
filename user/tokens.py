from rest_framework_simplejwt.tokens import RefreshToken

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"


def set_auth_cookies(response, user):
    """Issue a token pair for ``user`` and store it in HttpOnly cookies."""
    refresh = RefreshToken.for_user(user)
    response.set_cookie(
        key=ACCESS_COOKIE,
        value=str(refresh.access_token),
        httponly=True,
        secure=False,     # set True in production (HTTPS)
        samesite="Lax",
        max_age=60 * 60,  # 1 hour
    )
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=str(refresh),
        httponly=True,
        secure=False,
        samesite="Lax",
        max_age=7 * 24 * 60 * 60,  # 7 days
    )
    return response


def clear_auth_cookies(response):
    response.delete_cookie(ACCESS_COOKIE)
    response.delete_cookie(REFRESH_COOKIE)
    response.delete_cookie("sessionid")
    return response
