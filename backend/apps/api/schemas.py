from typing import Dict, Iterable, Optional

from drf_spectacular.utils import OpenApiExample, OpenApiResponse, inline_serializer
from rest_framework import serializers


class ErrorDetailSerializer(serializers.Serializer):
    code = serializers.CharField()
    message = serializers.CharField()
    status = serializers.IntegerField()
    details = serializers.JSONField(required=False)
    hint = serializers.CharField(required=False, allow_blank=True)
    extra = serializers.JSONField(required=False)


class ErrorResponseSerializer(serializers.Serializer):
    error = ErrorDetailSerializer()


def _error_example(name: str, code: str, message: str, status: int, details=None) -> OpenApiExample:
    body = {"code": code, "message": message, "status": status}
    if details is not None:
        body["details"] = details
    return OpenApiExample(name, value={"error": body}, response_only=True, status_codes=[str(status)])


NOT_ENOUGH_STOCK = _error_example(
    "Not enough stock",
    "VALIDATION_ERROR",
    "Not enough stock available",
    400,
    {"productId": "2", "requested": 3, "available": 2},
)
OUT_OF_STOCK = _error_example("Out of stock", "CONFLICT", "Product is out of stock", 409, {"productId": "2"})
STAFF_CANNOT_SHOP = _error_example(
    "Staff account", "FORBIDDEN", "Staff and admin accounts cannot own carts", 403, {"userId": "1"}
)


def error_responses(
    *status_codes: int, examples: Optional[Iterable[OpenApiExample]] = None
) -> Dict[int, OpenApiResponse]:
    """Error entries for ``extend_schema(responses=...)``, all sharing the error envelope."""
    examples = list(examples or [])
    return {
        code: OpenApiResponse(
            response=ErrorResponseSerializer,
            examples=[e for e in examples if str(code) in (e.status_codes or [])],
        )
        for code in status_codes
    }


def paginated_response(
    item_serializer_class: type[serializers.Serializer],
) -> type[serializers.Serializer]:
    """Inline serializer for a PageNumberPagination page: count, next, previous, results."""
    name = getattr(item_serializer_class, "__name__", "Items")
    return inline_serializer(
        name=f"Paginated{name}",
        fields={
            "count": serializers.IntegerField(),
            "next": serializers.CharField(allow_null=True),
            "previous": serializers.CharField(allow_null=True),
            "results": item_serializer_class(many=True),
        },
    )
