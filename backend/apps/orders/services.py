from __future__ import annotations

from decimal import ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple

from django.db import transaction

from apps.carts.domain import CENT
from apps.common import get_logger
from .dtos import OrderDTO
from .mappers import OrderMapper
from .models import Order
from .protocols import (
    OrderItemRepositoryProtocol,
    OrderRepositoryProtocol,
    StockKeeperProtocol,
)

logger = get_logger(__name__).bind(component="orders", layer="service")

ServiceError = Tuple[str, str, Optional[Dict[str, Any]]]


class _CheckoutRejected(Exception):
    def __init__(self, error: ServiceError):
        super().__init__(error[1])
        self.error = error


def _order_not_found(order_id: int) -> ServiceError:
    return "NOT_FOUND", "Order not found", {"orderId": str(order_id)}


class OrderService:
    """Turns a shopper's cart into an order and manages the orders afterwards.

    Checkout holds the cart lock and each product's stock lock for the whole
    transaction. A rejected line rolls back every stock movement before it.
    """

    def __init__(
        self,
        orders: OrderRepositoryProtocol,
        order_items: OrderItemRepositoryProtocol,
        cart_service,
        stock: StockKeeperProtocol,
    ):
        self.orders = orders
        self.order_items = order_items
        self.cart_service = cart_service
        self.stock = stock
        self.logger = logger.bind(service="OrderService")

    def create_order(
        self, user_id: int, shipping_address: str = "", payment_method: str = ""
    ) -> Tuple[Optional[OrderDTO], Optional[ServiceError]]:
        self.logger.info("Creating order", user_id=user_id)
        try:
            with transaction.atomic():
                order, items = self._checkout(user_id, shipping_address, payment_method)
        except _CheckoutRejected as exc:
            self.logger.info("Checkout rejected", user_id=user_id, code=exc.error[0])
            return None, exc.error
        self.logger.info(
            "Order created",
            user_id=user_id,
            order_id=order.id,
            lines=len(items),
            total=str(order.total),
        )
        return OrderMapper.to_dto(order, items), None

    def _checkout(self, user_id: int, shipping_address: str, payment_method: str):
        cart, manager = self.cart_service.open_for_checkout(user_id)
        if manager.is_empty():
            raise _CheckoutRejected(
                ("VALIDATION_ERROR", "Cart is empty", {"cartId": str(cart.id)})
            )
        # Stock rows are locked in product id order
        lines = sorted(manager, key=lambda line: line.item_id)
        for line in lines:
            _, error = self.stock.take_stock(line.item_id, line.quantity)
            if error:
                raise _CheckoutRejected(error)
        totals = manager.compute_totals().quantized()
        order = self.orders.create(
            user_id=user_id,
            status=Order.Status.PENDING,
            subtotal=totals.subtotal,
            shipping=totals.shipping,
            tax=totals.tax,
            total=totals.total,
            shipping_address=shipping_address,
            payment_method=payment_method,
        )
        items = self.order_items.create_many(
            order,
            [
                {
                    "product_id": line.item_id,
                    "title": line.display_name,
                    "unit_price": line.unit_price,
                    "quantity": line.quantity,
                    "line_total": line.line_total.quantize(CENT, rounding=ROUND_HALF_UP),
                }
                # Order lines keep the cart's display order
                for line in manager
            ],
        )
        self.cart_service.clear_cart(user_id)
        return order, items

    def list_orders(self, user_id: int, status: Optional[str] = None) -> List[OrderDTO]:
        orders = self.orders.list_for_user(user_id, status)
        self.logger.debug("Listing orders", user_id=user_id, status=status)
        return OrderMapper.many_to_dto(orders)

    def get_order(
        self, user_id: int, order_id: int
    ) -> Tuple[Optional[OrderDTO], Optional[ServiceError]]:
        order = self.orders.get_for_user(user_id, order_id)
        if order is None:
            self.logger.info("Order not found", user_id=user_id, order_id=order_id)
            return None, _order_not_found(order_id)
        return OrderMapper.to_dto(order), None

    def cancel_order(
        self, user_id: int, order_id: int
    ) -> Tuple[Optional[OrderDTO], Optional[ServiceError]]:
        with transaction.atomic():
            order = self.orders.lock_for_user(user_id, order_id)
            if order is None:
                return None, _order_not_found(order_id)
            if order.status not in Order.CANCELLABLE:
                self.logger.info(
                    "Order cannot be cancelled", order_id=order_id, status=order.status
                )
                return None, (
                    "VALIDATION_ERROR",
                    f"Cannot cancel order with status: {order.status}",
                    {"orderId": str(order_id), "status": order.status},
                )
            self.orders.update_fields(order, status=Order.Status.CANCELLED)
            items = list(self.order_items.list_for_order(order.id))
            for item in items:
                if item.product_id is not None:
                    self.stock.return_stock(item.product_id, item.quantity)
        self.logger.info("Order cancelled", user_id=user_id, order_id=order_id)
        return OrderMapper.to_dto(order, items), None
