from django.shortcuts import get_object_or_404
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from product.models import Product
from . import services
from .serializers import AddCartItemSerializer, CartSerializer, UpdateCartItemSerializer


def cart_response(request, cart, status_code=status.HTTP_200_OK):
    serializer = CartSerializer(cart, context={"request": request})
    return Response(serializer.data, status=status_code)


class CartDetailAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, format=None):
        return cart_response(request, services.get_cart(request.user))


class CartItemListAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, format=None):
        """
        Expected payload:
        {
            "product": <id>,
            "quantity": <int, default 1>
        }
        """
        serializer = AddCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_object_or_404(Product, pk=serializer.validated_data["product"])
        cart, created = services.add_item(
            request.user, product, serializer.validated_data["quantity"]
        )
        return cart_response(
            request, cart, status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )


class CartItemDetailAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, pk, format=None):
        """ Update quantity only. """
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cart = services.update_item(request.user, pk, serializer.validated_data["quantity"])
        return cart_response(request, cart)

    patch = put

    def delete(self, request, pk, format=None):
        return cart_response(request, services.remove_item(request.user, pk))


class CartClearAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, format=None):
        return cart_response(request, services.clear_cart(request.user))
