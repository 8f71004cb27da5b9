from decimal import ROUND_HALF_UP
from typing import Iterable, List, Optional

from apps.carts.domain import CENT
from .dtos import OrderDTO, OrderItemDTO
from .models import Order, OrderItem


def _money(value) -> str:
    return str(value.quantize(CENT, rounding=ROUND_HALF_UP))


class OrderItemMapper:
    @staticmethod
    def to_dto(item: OrderItem) -> OrderItemDTO:
        return OrderItemDTO(
            product_id=item.product_id,
            title=item.title,
            unit_price=_money(item.unit_price),
            quantity=int(item.quantity),
            line_total=_money(item.line_total),
        )


class OrderMapper:
    @staticmethod
    def to_dto(order: Order, items: Optional[Iterable[OrderItem]] = None) -> OrderDTO:
        if items is None:
            items = order.items.all()
        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            status=order.status,
            subtotal=_money(order.subtotal),
            shipping=_money(order.shipping),
            tax=_money(order.tax),
            total=_money(order.total),
            shipping_address=order.shipping_address or "",
            payment_method=order.payment_method or "",
            created_at=order.created_at.isoformat(),
            items=[OrderItemMapper.to_dto(item) for item in items],
        )

    @staticmethod
    def many_to_dto(orders: Iterable[Order]) -> List[OrderDTO]:
        return [OrderMapper.to_dto(o) for o in orders]
