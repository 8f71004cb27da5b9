from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from django.db import transaction

from apps.common import get_logger
from .domain import DEFAULT_SHIPPING, DEFAULT_TAX_RATE, CartLine, CartManager, Number
from .dtos import CartDTO
from .mappers import CartLineMapper, CartMapper
from .protocols import (
    CartProductRepositoryProtocol,
    CartRepositoryProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")

ServiceError = Tuple[str, str, Optional[Dict[str, Any]]]


class CartService:
    """Loads a shopper's cart into a :class:`CartManager`, applies the change
    there and writes back only what the manager accepted."""

    def __init__(
        self,
        carts: CartRepositoryProtocol,
        cart_products: CartProductRepositoryProtocol,
        products: ProductRepositoryProtocol,
        *,
        shipping: Number = DEFAULT_SHIPPING,
        tax_rate: Number = DEFAULT_TAX_RATE,
    ):
        self.carts = carts
        self.cart_products = cart_products
        self.products = products
        self.shipping = shipping
        self.tax_rate = tax_rate
        self.logger = logger.bind(service="CartService")

    def _load(self, user_id: int, *, for_update: bool = False):
        cart = self.carts.get_or_create_for_user(user_id)
        if for_update:
            # Concurrent writers of one cart queue here until commit
            cart = self.carts.lock(cart.id)
        lines = CartLineMapper.many_from_models(self.cart_products.list_for_cart(cart.id))
        manager = CartManager(lines, shipping=self.shipping, tax_rate=self.tax_rate)
        return cart, manager

    def _stock_error(self, product, requested: int) -> ServiceError:
        self.logger.info(
            "Requested quantity exceeds stock",
            product_id=product.id,
            requested=requested,
            available=product.stock_quantity,
        )
        return (
            "VALIDATION_ERROR",
            "Not enough stock available",
            {
                "productId": str(product.id),
                "requested": requested,
                "available": product.stock_quantity,
            },
        )

    def get_cart(self, user_id: int) -> CartDTO:
        cart, manager = self._load(user_id)
        self.logger.debug("Fetched cart", user_id=user_id, cart_id=cart.id, lines=len(manager))
        return CartMapper.to_dto(cart, manager)

    def open_for_checkout(self, user_id: int):
        """Locked ``(cart, manager)`` pair. Call inside ``transaction.atomic()``."""
        return self._load(user_id, for_update=True)

    def add_item(
        self, user_id: int, product_id: int, quantity: int = 1
    ) -> Tuple[Optional[CartDTO], Optional[ServiceError]]:
        self.logger.info(
            "Adding item to cart", user_id=user_id, product_id=product_id, quantity=quantity
        )
        with transaction.atomic():
            cart, manager = self._load(user_id, for_update=True)
            product = self.products.get_for_update(product_id)
            if product is None:
                self.logger.warning("Product not found for cart add", product_id=product_id)
                return None, ("NOT_FOUND", "Product not found", {"productId": str(product_id)})
            current = manager.get(product.id)
            requested = quantity + (current.quantity if current else 0)
            if requested > product.stock_quantity:
                return None, self._stock_error(product, requested)
            line = manager.add(
                CartLine(
                    item_id=product.id,
                    display_name=product.title,
                    unit_price=product.price,
                    quantity=quantity,
                    image=product.image or "",
                )
            )
            self.cart_products.upsert(cart, product, line.quantity)
        self.logger.info(
            "Cart line stored", cart_id=cart.id, product_id=product.id, quantity=line.quantity
        )
        return CartMapper.to_dto(cart, manager), None

    def set_quantity(
        self, user_id: int, product_id: int, quantity: int
    ) -> Tuple[Optional[CartDTO], Optional[ServiceError]]:
        with transaction.atomic():
            cart, manager = self._load(user_id, for_update=True)
            if product_id not in manager or quantity < 1:
                self.logger.debug(
                    "Quantity change ignored",
                    cart_id=cart.id,
                    product_id=product_id,
                    quantity=quantity,
                )
                return CartMapper.to_dto(cart, manager), None
            product = self.products.get_for_update(product_id)
            if product is None:
                return None, ("NOT_FOUND", "Product not found", {"productId": str(product_id)})
            if quantity > product.stock_quantity:
                return None, self._stock_error(product, quantity)
            manager.set_quantity(product_id, quantity)
            self.cart_products.upsert(cart, product, quantity)
        self.logger.info(
            "Cart quantity updated", cart_id=cart.id, product_id=product_id, quantity=quantity
        )
        return CartMapper.to_dto(cart, manager), None

    def remove_item(self, user_id: int, product_id: int) -> CartDTO:
        with transaction.atomic():
            cart, manager = self._load(user_id, for_update=True)
            if manager.remove(product_id):
                self.cart_products.delete_product(cart, product_id)
                self.logger.info("Cart line removed", cart_id=cart.id, product_id=product_id)
        return CartMapper.to_dto(cart, manager)

    def clear_cart(self, user_id: int) -> CartDTO:
        with transaction.atomic():
            cart, manager = self._load(user_id, for_update=True)
            removed = len(manager)
            manager.clear()
            self.cart_products.delete_for_cart(cart)
        self.logger.info("Cart cleared", cart_id=cart.id, removed=removed)
        return CartMapper.to_dto(cart, manager)
