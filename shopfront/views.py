from django.http import JsonResponse
from django.views.defaults import page_not_found
from rest_framework import permissions, status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.response import Response


@api_view(["GET"])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def health(request):
    return Response({"status": "UP", "message": "API is healthy"}, status=status.HTTP_200_OK)


def api_not_found(request, exception=None):
    # API clients get JSON, everyone else the regular 404 page
    if request.path.startswith("/api/"):
        return JsonResponse(
            {"status": "error", "status_code": 404, "message": "Not Found"},
            status=404,
        )
    return page_not_found(request, exception)
