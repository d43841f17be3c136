# order/views.py
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from shopfront.pagination import StandardResultsSetPagination
from . import services
from .models import Notification
from .serializers import CheckoutSerializer, NotificationSerializer, OrderSerializer


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated])
def orders(request):
    """
    GET  /api/v1/orders/ -> the user's orders, newest first (paginated)
    POST /api/v1/orders/ -> checkout the user's cart
         { "shipping_address": {...}, "billing_address": {...},
           "payment_method": "card", "payment_token": "tok_..." }
    """
    if request.method == "GET":
        qs = services.order_queryset().filter(user=request.user)
        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(qs, request)
        serializer = OrderSerializer(page, many=True, context={"request": request})
        return paginator.get_paginated_response(serializer.data)

    serializer = CheckoutSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    order = services.create_order(request.user, **serializer.validated_data)
    return Response(
        OrderSerializer(order, context={"request": request}).data,
        status=status.HTTP_201_CREATED,
    )


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def order_detail(request, order_id):
    order = get_object_or_404(services.order_queryset(), pk=order_id)
    if order.user_id != request.user.id and not request.user.is_staff:
        raise PermissionDenied("Forbidden: You do not have access to this order.")
    return Response(OrderSerializer(order, context={"request": request}).data)


@api_view(["PUT", "PATCH"])
@permission_classes([IsAdminUser])
def order_status(request, order_id):
    """
    Body: { "status": "SHIPPED" }
    """
    order = get_object_or_404(services.order_queryset(), pk=order_id)

    new_status = request.data.get("status")
    if not new_status:
        raise ValidationError({"status": ["Status is required"]})

    services.update_status(order, new_status)
    return Response(OrderSerializer(order, context={"request": request}).data, status=status.HTTP_200_OK)


@api_view(["GET", "PATCH"])
@permission_classes([IsAuthenticated])
def notifications(request):
    if request.method == "GET":
        notes = Notification.objects.filter(user=request.user)
        return Response(NotificationSerializer(notes, many=True).data)

    # PATCH: mark all as read (or accept {"id": <id>} to mark single)
    note_id = request.data.get("id")
    qs = Notification.objects.filter(user=request.user)
    if note_id:
        qs = qs.filter(id=note_id)
    updated = qs.update(read=True)
    return Response({"message": "notifications updated", "updated": updated}, status=status.HTTP_200_OK)
