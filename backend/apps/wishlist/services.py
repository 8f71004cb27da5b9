from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

from django.db import transaction

from apps.api.exceptions import ApplicationError
from apps.common import get_logger
from .domain import WishlistEntry, WishlistManager
from .dtos import WishlistDTO
from .mappers import WishlistEntryMapper, WishlistMapper
from .protocols import ProductRepositoryProtocol, WishlistItemRepositoryProtocol

logger = get_logger(__name__).bind(component="wishlist", layer="service")

ServiceError = Tuple[str, str, Optional[Dict[str, Any]]]
CartHandoff = Callable[[int, WishlistEntry], None]


class AddToCartHandoff:
    """Adds a moved wishlist entry to the shopper's cart with quantity 1.

    A rejected add raises :class:`ApplicationError`, which rolls the move back.
    ``enabled`` is asked on every move, so a settings change applies to the
    next request. Without it the hand-off always runs.
    """

    def __init__(self, cart_service, *, enabled: Optional[Callable[[], bool]] = None):
        self.cart_service = cart_service
        self.enabled = enabled
        self.logger = logger.bind(handoff="AddToCartHandoff")

    def is_enabled(self) -> bool:
        return self.enabled is None or bool(self.enabled())

    def __call__(self, user_id: int, entry: WishlistEntry) -> None:
        if not self.is_enabled():
            self.logger.debug("Cart hand-off disabled", user_id=user_id, product_id=entry.item_id)
            return
        _dto, error = self.cart_service.add_item(user_id, entry.item_id, 1)
        if error:
            code, message, details = error
            self.logger.warning(
                "Cart rejected moved entry",
                user_id=user_id,
                product_id=entry.item_id,
                code=code,
            )
            raise ApplicationError(code, message, details=details)
        self.logger.info("Moved entry added to cart", user_id=user_id, product_id=entry.item_id)


class WishlistService:
    def __init__(
        self,
        items: WishlistItemRepositoryProtocol,
        products: ProductRepositoryProtocol,
        *,
        cart_handoff: Optional[CartHandoff] = None,
    ):
        self.items = items
        self.products = products
        self.cart_handoff = cart_handoff
        self.logger = logger.bind(service="WishlistService")

    def _load(self, user_id: int) -> WishlistManager:
        listener = None
        if self.cart_handoff is not None:
            handoff = self.cart_handoff

            def listener(entry: WishlistEntry) -> None:
                handoff(user_id, entry)

        entries = WishlistEntryMapper.many_from_models(self.items.list_for_user(user_id))
        return WishlistManager(entries, on_move_to_cart=listener)

    def get_wishlist(self, user_id: int) -> WishlistDTO:
        manager = self._load(user_id)
        self.logger.debug("Fetched wishlist", user_id=user_id, count=manager.count())
        return WishlistMapper.to_dto(user_id, manager)

    def add_entry(
        self, user_id: int, product_id: int
    ) -> Tuple[Optional[WishlistDTO], Optional[ServiceError]]:
        product = self.products.get(id=product_id)
        if product is None:
            self.logger.warning("Product not found for wishlist add", product_id=product_id)
            return None, ("NOT_FOUND", "Product not found", {"productId": str(product_id)})
        with transaction.atomic():
            manager = self._load(user_id)
            if product.id in manager:
                self.logger.debug("Product already wishlisted", user_id=user_id, product_id=product.id)
                return WishlistMapper.to_dto(user_id, manager), None
            manager.add(
                WishlistEntry(
                    item_id=product.id,
                    display_name=product.title,
                    unit_price=product.price,
                    in_stock=product.stock_quantity > 0,
                    image=product.image or "",
                )
            )
            self.items.create(user_id=user_id, product=product, liked=True)
        self.logger.info("Wishlist entry added", user_id=user_id, product_id=product.id)
        return WishlistMapper.to_dto(user_id, manager), None

    def remove_entry(self, user_id: int, product_id: int) -> WishlistDTO:
        with transaction.atomic():
            manager = self._load(user_id)
            if manager.remove(product_id):
                self.items.delete_product(user_id, product_id)
                self.logger.info("Wishlist entry removed", user_id=user_id, product_id=product_id)
        return WishlistMapper.to_dto(user_id, manager)

    def toggle_liked(self, user_id: int, product_id: int) -> WishlistDTO:
        """Flip the liked flag. Unknown products leave the wishlist unchanged."""
        with transaction.atomic():
            manager = self._load(user_id)
            updated = manager.toggle_liked(product_id)
            if updated is None:
                self.logger.debug("Like toggle ignored", user_id=user_id, product_id=product_id)
                return WishlistMapper.to_dto(user_id, manager)
            self.items.set_liked(user_id, product_id, updated.liked)
        self.logger.info(
            "Wishlist like toggled", user_id=user_id, product_id=product_id, liked=updated.liked
        )
        return WishlistMapper.to_dto(user_id, manager)

    def move_to_cart(
        self, user_id: int, product_id: int
    ) -> Tuple[Optional[WishlistDTO], Optional[ServiceError]]:
        with transaction.atomic():
            manager = self._load(user_id)
            entry = manager.get(product_id)
            if entry is None:
                self.logger.debug("Move to cart ignored", user_id=user_id, product_id=product_id)
                return WishlistMapper.to_dto(user_id, manager), None
            if not entry.in_stock:
                self.logger.info("Move to cart rejected", user_id=user_id, product_id=product_id)
                return None, (
                    "CONFLICT",
                    "Product is out of stock",
                    {"productId": str(product_id)},
                )
            # The hand-off runs inside move_to_cart; a failure leaves the row in place
            manager.move_to_cart(product_id)
            self.items.delete_product(user_id, product_id)
        self.logger.info("Wishlist entry moved to cart", user_id=user_id, product_id=product_id)
        return WishlistMapper.to_dto(user_id, manager), None
