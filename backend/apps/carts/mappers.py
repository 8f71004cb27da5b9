"""Translate between cart rows, the in-memory manager and response DTOs."""
from decimal import ROUND_HALF_UP
from typing import Iterable, List

from .domain import CENT, CartLine, CartManager, CartTotals
from .dtos import CartDTO, CartLineDTO, CartTotalsDTO
from .models import Cart, CartProduct


def _money(value) -> str:
    return str(value.quantize(CENT, rounding=ROUND_HALF_UP))


class CartLineMapper:
    @staticmethod
    def from_model(cp: CartProduct) -> CartLine:
        product = cp.product
        return CartLine(
            item_id=product.id,
            display_name=product.title,
            unit_price=product.price,
            quantity=int(cp.quantity),
            image=product.image or "",
        )

    @staticmethod
    def many_from_models(items: Iterable[CartProduct]) -> List[CartLine]:
        return [CartLineMapper.from_model(cp) for cp in items]

    @staticmethod
    def to_dto(line: CartLine) -> CartLineDTO:
        return CartLineDTO(
            product_id=line.item_id,
            name=line.display_name,
            unit_price=_money(line.unit_price),
            quantity=line.quantity,
            line_total=_money(line.line_total),
            image=line.image,
        )


class CartMapper:
    @staticmethod
    def totals_to_dto(totals: CartTotals) -> CartTotalsDTO:
        rounded = totals.quantized()
        return CartTotalsDTO(
            subtotal=str(rounded.subtotal),
            shipping=str(rounded.shipping),
            tax=str(rounded.tax),
            total=str(rounded.total),
        )

    @staticmethod
    def to_dto(cart: Cart, manager: CartManager) -> CartDTO:
        return CartDTO(
            id=cart.id,
            user_id=cart.user_id,
            date=str(cart.date),
            items=[CartLineMapper.to_dto(line) for line in manager],
            totals=CartMapper.totals_to_dto(manager.compute_totals()),
            item_count=manager.item_count(),
            is_empty=manager.is_empty(),
        )
