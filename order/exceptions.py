from rest_framework import status
from rest_framework.exceptions import APIException


class CartEmpty(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Cart is empty. Cannot create order."
    default_code = "cart_empty"


class ProductUnavailable(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Product is no longer available."
    default_code = "product_unavailable"

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found.")
