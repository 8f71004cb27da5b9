from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.api.schemas import NOT_ENOUGH_STOCK, error_responses, paginated_response
from apps.api.utils import error_response, service_error_response
from apps.common import get_logger
from .commands import CheckoutCommand, OrderQuery
from .container import build_order_service
from .pagination import OrderListPagination
from .serializers import CheckoutSerializer, OrderReadSerializer

logger = get_logger(__name__).bind(component="orders", layer="view")

_ORDER_PATH = OpenApiParameter("order_id", int, OpenApiParameter.PATH)


@extend_schema(tags=["Orders"])
class OrderListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()
    log = logger.bind(view="OrderListView")

    @extend_schema(
        summary="List orders",
        description="The caller's orders, newest first. Paginated with ?page and ?limit.",
        parameters=[OpenApiParameter("status", str, description="Only orders with this status")],
        responses={200: paginated_response(OrderReadSerializer), **error_responses(400, 401, 403)},
    )
    def get(self, request):
        try:
            query = OrderQuery.from_params(request.query_params)
        except ValueError as exc:
            return error_response(
                "VALIDATION_ERROR", str(exc), {"status": request.query_params.get("status")}
            )
        orders = self.service.list_orders(request.validated_user_id, query.status)
        paginator = OrderListPagination()
        page = paginator.paginate_queryset(orders, request, view=self)
        return paginator.get_paginated_response(OrderReadSerializer(page, many=True).data)

    @extend_schema(
        summary="Place order",
        description=(
            "Creates an order from every line in the caller's cart, takes the stock "
            "and empties the cart. Nothing changes when any line lacks stock."
        ),
        request=CheckoutSerializer,
        responses={
            201: OrderReadSerializer,
            **error_responses(400, 401, 403, 404, examples=[NOT_ENOUGH_STOCK]),
        },
    )
    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = CheckoutCommand.from_raw(serializer.validated_data)
        user_id = request.validated_user_id
        dto, error = self.service.create_order(
            user_id, command.shipping_address, command.payment_method
        )
        if error:
            return service_error_response(error)
        self.log.info("Order placed via API", user_id=user_id, order_id=dto.id)
        return Response(OrderReadSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Orders"])
class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()

    @extend_schema(
        summary="Get order",
        description="Orders of other shoppers are reported as not found.",
        parameters=[_ORDER_PATH],
        responses={200: OrderReadSerializer, **error_responses(401, 403, 404)},
    )
    def get(self, request, order_id: int):
        dto, error = self.service.get_order(request.validated_user_id, int(order_id))
        if error:
            return service_error_response(error)
        return Response(OrderReadSerializer(dto).data)


@extend_schema(tags=["Orders"])
class OrderCancelView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()
    log = logger.bind(view="OrderCancelView")

    @extend_schema(
        summary="Cancel order",
        description=(
            "Allowed until the order has shipped. "
            "The ordered quantities go back into stock."
        ),
        parameters=[_ORDER_PATH],
        request=None,
        responses={200: OrderReadSerializer, **error_responses(400, 401, 403, 404)},
    )
    def post(self, request, order_id: int):
        user_id = request.validated_user_id
        dto, error = self.service.cancel_order(user_id, int(order_id))
        if error:
            return service_error_response(error)
        self.log.info("Order cancelled via API", user_id=user_id, order_id=dto.id)
        return Response(OrderReadSerializer(dto).data)
