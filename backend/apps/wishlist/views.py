from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.api.schemas import OUT_OF_STOCK, error_responses
from apps.api.utils import error_response, service_error_response
from apps.common import get_logger
from .commands import WishlistAddCommand
from .container import build_wishlist_service
from .serializers import WishlistReadSerializer, WishlistAddSerializer

logger = get_logger(__name__).bind(component="wishlist", layer="view")

_PRODUCT_PATH = OpenApiParameter("product_id", int, OpenApiParameter.PATH)


@extend_schema(tags=["Wishlist"])
class WishlistView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()
    log = logger.bind(view="WishlistView")

    @extend_schema(
        summary="Get wishlist",
        description="Returns the caller's saved products with a pluralised count label.",
        responses={
            200: WishlistReadSerializer,
            **error_responses(401, 403),
        },
    )
    def get(self, request):
        user_id = request.validated_user_id
        self.log.debug("Fetching wishlist", user_id=user_id)
        return Response(WishlistReadSerializer(self.service.get_wishlist(user_id)).data)


@extend_schema(tags=["Wishlist"])
class WishlistItemListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()
    log = logger.bind(view="WishlistItemListView")

    @extend_schema(
        summary="Save product to wishlist",
        description="Saving a product that is already in the wishlist is a no-op.",
        request=WishlistAddSerializer,
        responses={
            201: WishlistReadSerializer,
            **error_responses(400, 404),
        },
    )
    def post(self, request):
        serializer = WishlistAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = WishlistAddCommand.from_raw(dict(serializer.validated_data))
        if command is None:
            return error_response("VALIDATION_ERROR", "Invalid product identifier")
        user_id = request.validated_user_id
        dto, error = self.service.add_entry(user_id, command.product_id)
        if error:
            return service_error_response(error)
        self.log.info("Wishlist add handled via API", user_id=user_id, product_id=command.product_id)
        return Response(WishlistReadSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Wishlist"])
class WishlistItemDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()
    log = logger.bind(view="WishlistItemDetailView")

    @extend_schema(
        summary="Remove product from wishlist",
        parameters=[_PRODUCT_PATH],
        responses={200: WishlistReadSerializer},
    )
    def delete(self, request, product_id: int):
        user_id = request.validated_user_id
        dto = self.service.remove_entry(user_id, int(product_id))
        self.log.info("Wishlist remove handled via API", user_id=user_id, product_id=product_id)
        return Response(WishlistReadSerializer(dto).data)


@extend_schema(tags=["Wishlist"])
class WishlistItemLikeView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()
    log = logger.bind(view="WishlistItemLikeView")

    @extend_schema(
        summary="Toggle liked flag",
        description="A product that is not in the wishlist leaves it unchanged.",
        parameters=[_PRODUCT_PATH],
        request=None,
        responses={
            200: WishlistReadSerializer,
            **error_responses(401, 403),
        },
    )
    def post(self, request, product_id: int):
        user_id = request.validated_user_id
        dto = self.service.toggle_liked(user_id, int(product_id))
        return Response(WishlistReadSerializer(dto).data)


@extend_schema(tags=["Wishlist"])
class WishlistItemMoveToCartView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()
    log = logger.bind(view="WishlistItemMoveToCartView")

    @extend_schema(
        summary="Move product to cart",
        description=(
            "Removes the product from the wishlist. Out-of-stock products are "
            "rejected with 409 and stay in the wishlist."
        ),
        parameters=[_PRODUCT_PATH],
        request=None,
        responses={
            200: WishlistReadSerializer,
            **error_responses(409, examples=[OUT_OF_STOCK]),
        },
    )
    def post(self, request, product_id: int):
        user_id = request.validated_user_id
        dto, error = self.service.move_to_cart(user_id, int(product_id))
        if error:
            self.log.info("Move to cart refused", user_id=user_id, product_id=product_id, code=error[0])
            return service_error_response(error)
        return Response(WishlistReadSerializer(dto).data)
