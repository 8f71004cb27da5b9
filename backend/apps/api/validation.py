from typing import Any, Optional

from django.http import HttpRequest
from rest_framework.exceptions import AuthenticationFailed as DRFAuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="validation")

_jwt_authenticator = JWTAuthentication()

CART_VIEWS = ("CartView", "CartItemListView", "CartItemDetailView")
WISHLIST_VIEWS = (
    "WishlistView",
    "WishlistItemListView",
    "WishlistItemDetailView",
    "WishlistItemLikeView",
    "WishlistItemMoveToCartView",
)
ORDER_VIEWS = ("OrderListView", "OrderDetailView", "OrderCancelView")
STAFF_VIEWS = ("ProductStockView",)


def _is_authenticated_user(request: HttpRequest) -> bool:
    user = getattr(request, "user", None)
    if user and getattr(user, "is_authenticated", False) and getattr(user, "id", None):
        return True

    # DRF attaches the authenticated user later in the request lifecycle. Since this
    # middleware runs earlier, attempt JWT authentication manually to support bearer tokens.
    meta = getattr(request, "META", {}) or {}
    auth_header = meta.get("HTTP_AUTHORIZATION") if hasattr(meta, "get") else None
    if not auth_header:
        return False

    try:
        authenticated = _jwt_authenticator.authenticate(request)
    except (InvalidToken, DRFAuthenticationFailed) as exc:
        logger.warning("JWT authentication failed", detail=str(exc))
        return False

    if not authenticated:
        return False

    user, token = authenticated
    if not getattr(user, "is_authenticated", False) or not getattr(user, "id", None):
        return False

    # Mirror DRF's behaviour so downstream consumers see the authenticated user.
    request.user = user
    request.auth = token
    request.is_privileged_user = _is_privileged_user(user)
    logger.debug("Authenticated user from bearer token", user_id=user.id)
    return True


def _set_validated_user(request: HttpRequest, user_id: Optional[int]) -> None:
    request.validated_user_id = user_id
    if hasattr(request, "user"):
        request.is_privileged_user = _is_privileged_user(getattr(request, "user", None))


def _is_privileged_user(user: Any) -> bool:
    return bool(getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))


def _validate_product_path(view_name: str, view_kwargs) -> Any:
    raw = (view_kwargs or {}).get("product_id")
    if raw is None:
        return None
    try:
        int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid product_id in path", view=view_name, value=raw)
        return error_response(
            "VALIDATION_ERROR",
            "Invalid product identifier",
            {"productId": str(raw)},
        )
    return None


def _validate_shopper(request: HttpRequest, view_name: str, collection: str) -> Any:
    """Cart and wishlist endpoints belong to customer accounts only."""
    if not _is_authenticated_user(request):
        logger.warning(
            "Shopper view requires authentication",
            view=view_name,
            method=request.method,
        )
        return error_response("UNAUTHORIZED", "Authentication required")
    actor_id = int(request.user.id)
    _set_validated_user(request, actor_id)
    if _is_privileged_user(request.user):
        logger.warning(
            "Staff/admin attempted to use shopper view",
            view=view_name,
            actor_id=actor_id,
        )
        return error_response(
            "FORBIDDEN",
            f"Staff and admin accounts cannot own {collection}",
            {"userId": str(actor_id)},
        )
    logger.debug(
        "Validated shopper context",
        view=view_name,
        user_id=actor_id,
        method=request.method,
    )
    return None


def validate_request_context(request: HttpRequest, view_class, view_kwargs) -> Any:
    """
    Performs request level validation for specific API views.
    Returns a DRF Response when validation fails; otherwise None and
    attaches validated data to the request instance.
    """
    view_name = getattr(view_class, "__name__", "")

    logger.debug(
        "Running request context validation",
        view=view_name,
        method=getattr(request, "method", None),
    )

    if view_name in CART_VIEWS or view_name in WISHLIST_VIEWS or view_name in ORDER_VIEWS:
        if view_name in CART_VIEWS:
            collection = "carts"
        elif view_name in WISHLIST_VIEWS:
            collection = "wishlists"
        else:
            collection = "orders"
        resp = _validate_shopper(request, view_name, collection)
        if resp is not None:
            return resp
        return _validate_product_path(view_name, view_kwargs)
    elif view_name in STAFF_VIEWS:
        if not _is_authenticated_user(request):
            logger.warning(f"{view_name} {request.method} requires authentication")
            return error_response("UNAUTHORIZED", "Authentication required")
        _set_validated_user(request, int(request.user.id))
        if not _is_privileged_user(request.user):
            logger.warning(
                f"{view_name} {request.method} forbidden",
                user_id=request.user.id,
            )
            return error_response(
                "FORBIDDEN",
                "You do not have permission to manage products",
            )

    return None
