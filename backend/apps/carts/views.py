from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.api.schemas import NOT_ENOUGH_STOCK, STAFF_CANNOT_SHOP, error_responses
from apps.api.utils import error_response, service_error_response
from apps.common import get_logger
from .commands import CartItemCommand, CartQuantityCommand
from .container import build_cart_service
from .serializers import (
    CartReadSerializer,
    CartItemWriteSerializer,
    CartQuantitySerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")

_CUSTOMER_ONLY = (
    "Requires the bearer token of a customer account. Staff and admin accounts "
    "cannot own carts."
)


@extend_schema(tags=["Cart"])
class CartView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        summary="Get cart",
        description=(
            "Returns the caller's cart with line totals and the order summary. "
            + _CUSTOMER_ONLY
        ),
        responses={
            200: CartReadSerializer,
            **error_responses(401, 403, examples=[STAFF_CANNOT_SHOP]),
        },
    )
    def get(self, request):
        user_id = request.validated_user_id
        self.log.debug("Fetching cart", user_id=user_id)
        dto = self.service.get_cart(user_id)
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        summary="Clear cart",
        description="Removes every line and returns the empty cart.",
        responses={
            200: CartReadSerializer,
            **error_responses(401, 403),
        },
    )
    def delete(self, request):
        user_id = request.validated_user_id
        dto = self.service.clear_cart(user_id)
        self.log.info("Cart cleared via API", user_id=user_id, cart_id=dto.id)
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartItemListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemListView")

    @extend_schema(
        summary="Add item to cart",
        description=(
            "Adds a product to the cart. Adding a product already in the cart "
            "increases its quantity. The resulting quantity may not exceed the "
            "product's stock. " + _CUSTOMER_ONLY
        ),
        request=CartItemWriteSerializer,
        responses={
            201: CartReadSerializer,
            **error_responses(400, 401, 403, 404, examples=[NOT_ENOUGH_STOCK]),
        },
    )
    def post(self, request):
        serializer = CartItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = CartItemCommand.from_raw(dict(serializer.validated_data))
        if command is None:
            return error_response(
                "VALIDATION_ERROR", "Invalid cart item", dict(serializer.validated_data)
            )
        user_id = request.validated_user_id
        dto, error = self.service.add_item(user_id, command.product_id, command.quantity)
        if error:
            return service_error_response(error)
        self.log.info(
            "Item added via API",
            user_id=user_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        return Response(CartReadSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Cart"])
class CartItemDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemDetailView")

    @extend_schema(
        summary="Set item quantity",
        description=(
            "Sets the quantity of a line. Quantities below 1 and unknown products "
            "leave the cart unchanged."
        ),
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        request=CartQuantitySerializer,
        responses={
            200: CartReadSerializer,
            **error_responses(400, 401, 403, examples=[NOT_ENOUGH_STOCK]),
        },
    )
    def patch(self, request, product_id: int):
        serializer = CartQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = CartQuantityCommand.from_raw(product_id, serializer.validated_data)
        user_id = request.validated_user_id
        self.log.debug(
            "Setting cart quantity",
            user_id=user_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        dto, error = self.service.set_quantity(user_id, command.product_id, command.quantity)
        if error:
            return service_error_response(error)
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        summary="Remove item from cart",
        description="Removing a product that is not in the cart is a no-op.",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            200: CartReadSerializer,
            **error_responses(401, 403),
        },
    )
    def delete(self, request, product_id: int):
        user_id = request.validated_user_id
        dto = self.service.remove_item(user_id, int(product_id))
        self.log.info("Remove item handled via API", user_id=user_id, product_id=product_id)
        return Response(CartReadSerializer(dto).data)
