from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.api.schemas import paginated_response, error_responses
from apps.api.utils import error_response, service_error_response
from apps.common import get_logger
from .commands import ProductQuery, StockCommand
from .container import build_catalog_service
from .pagination import ProductListPagination
from .serializers import CategorySerializer, ProductReadSerializer, ProductStockSerializer

logger = get_logger(__name__).bind(component="catalog", layer="view")

_PRODUCT_PATH = OpenApiParameter("product_id", int, OpenApiParameter.PATH)


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    service = build_catalog_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="Browse products",
        description="Paginated with ?page and ?limit. Results may come from cache.",
        parameters=[
            OpenApiParameter("category", str, description="Category name"),
            OpenApiParameter("in_stock", bool, description="Only products that can be bought"),
        ],
        responses={200: paginated_response(ProductReadSerializer)},
    )
    def get(self, request):
        query = ProductQuery.from_params(request.query_params)
        products = self.service.browse(query.category, query.available_only)
        paginator = ProductListPagination()
        page = paginator.paginate_queryset(products, request, view=self)
        self.log.debug(
            "Browse served",
            category=query.category,
            available_only=query.available_only,
            total=len(products),
        )
        return paginator.get_paginated_response(ProductReadSerializer(page, many=True).data)


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_catalog_service()

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[_PRODUCT_PATH],
        responses={200: ProductReadSerializer, **error_responses(404)},
    )
    def get(self, request, product_id: int):
        dto = self.service.get_product(int(product_id))
        if dto is None:
            return error_response("NOT_FOUND", "Product not found", {"productId": str(product_id)})
        return Response(ProductReadSerializer(dto).data)


@extend_schema(tags=["Catalog"])
class ProductStockView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_catalog_service()
    log = logger.bind(view="ProductStockView")

    @extend_schema(
        summary="Set stock level",
        description="Staff only. Zero marks the product out of stock.",
        parameters=[_PRODUCT_PATH],
        request=ProductStockSerializer,
        responses={200: ProductReadSerializer, **error_responses(400, 401, 403, 404)},
    )
    def put(self, request, product_id: int):
        serializer = ProductStockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = StockCommand.from_raw(product_id, serializer.validated_data)
        dto, error = self.service.set_stock(command.product_id, command.quantity)
        if error:
            return service_error_response(error)
        self.log.info(
            "Stock updated via API",
            product_id=command.product_id,
            stock=command.quantity,
            actor_id=request.validated_user_id,
        )
        return Response(ProductReadSerializer(dto).data)


@extend_schema(tags=["Catalog"])
class CategoryListView(APIView):
    permission_classes = [AllowAny]
    service = build_catalog_service()

    @extend_schema(summary="List categories", responses={200: CategorySerializer(many=True)})
    def get(self, request):
        return Response(CategorySerializer(self.service.list_categories(), many=True).data)
